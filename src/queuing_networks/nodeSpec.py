import numpy as np

from collections import namedtuple

from queuing_networks.distributions  import toRate
from queuing_networks.markovianModels import M_M_1, M_M_1_K, M_M_INF, M_M_S, M_M_S_K, checkInteger
from queuing_networks.networkErrors  import DimensionMismatch, InvalidModelParameter, NodeIndexOutOfRange

# Параметры узла сети: интенсивность обслуживания, число каналов, ёмкость
class NodeSpec(namedtuple('NodeSpec', ['mu', 'servers', 'capacity'])):

    __slots__ = ()

    def __new__(cls, mu, servers = 1, capacity = np.inf):
        mu = toRate(mu, 'mu')
        if servers != np.inf:
            servers = checkInteger(servers, 'servers')
        if capacity != np.inf:
            if servers == np.inf:
                raise InvalidModelParameter('A node with infinite servers cannot have a finite capacity')
            capacity = checkInteger(capacity, 'capacity', servers)
        return super().__new__(cls, mu, servers, capacity)

    # Интенсивность обслуживания при k заявках в узле
    def serviceRate(self, k):
        return min(k, self.servers) * self.mu

    # Модель узла при интенсивности входящего потока lambdaRate
    def model(self, lambdaRate):
        if self.servers == np.inf:
            return M_M_INF(lambdaRate, self.mu)
        if self.capacity != np.inf:
            if self.servers == 1:
                return M_M_1_K(lambdaRate, self.mu, self.capacity)
            return M_M_S_K(lambdaRate, self.mu, self.servers, self.capacity)
        if self.servers == 1:
            return M_M_1(lambdaRate, self.mu)
        return M_M_S(lambdaRate, self.mu, self.servers)

# Проверка номера узла (нумерация с 1)
def checkNodeIndex(i, M):
    if isinstance(i, bool) or not isinstance(i, (int, np.integer)) or not 1 <= i <= M:
        raise NodeIndexOutOfRange(f'Node index must be an integer in 1..{M}, got {i}')
    return int(i)

# Приведение вектора (или набора векторов) состояний узлов к массиву размера ... x M
def occupancyArray(n, M):
    n = np.asarray(n, dtype = float)
    if n.ndim not in (1, 2) or n.shape[-1] != M:
        raise DimensionMismatch(f'Occupancy vector must have {M} entries, got shape {n.shape}')
    if not np.isfinite(n).all() or (n < 0).any() or (n != np.floor(n)).any():
        raise InvalidModelParameter('Occupancy values must be non-negative integers')
    return n.astype(int)
