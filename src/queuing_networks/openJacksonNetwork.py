import numpy as np

from numbers import Real

from queuing_networks.distributions    import NoDistribution, extractRate, toRate
from queuing_networks.networkErrors    import DimensionMismatch, InvalidModelParameter
from queuing_networks.nodeSpec         import NodeSpec, checkNodeIndex, occupancyArray
from queuing_networks.trafficEquations import checkRoutingMatrix, solveTrafficEquations

class OpenJacksonNetwork():

    def __init__(self, nodes, Q, arrivals, entry = None, errorRate = 1e-9):
        self.nodes = tuple(nodes)
        self.M = len(self.nodes)     # Количество узлов (приборов) в сети
        self.ErrorRate = errorRate   # Допустимая погрешность для сумм вероятностей
        if self.M == 0 or not all([isinstance(node, NodeSpec) for node in self.nodes]):
            raise InvalidModelParameter('Network nodes must be a non-empty sequence of NodeSpec')
        self.Q = checkRoutingMatrix(Q, self.M)
        self.Q.setflags(write = False)
        self.gamma = self.findGamma(arrivals, entry)
        self.lambdaArray = solveTrafficEquations(self.Q, self.gamma, self.ErrorRate)
        self.lambdaArray.setflags(write = False)
        self.models = tuple([self.nodes[i].model(self.lambdaArray[i]) for i in range(self.M)])
        self.findOut()

    # Интенсивность внешнего потока в узел: число, распределение или no_distr()
    def externalRate(self, value):
        if isinstance(value, NoDistribution):
            return 0.
        if isinstance(value, Real) and not isinstance(value, bool):
            if not np.isfinite(value) or value < 0:
                raise InvalidModelParameter(f'External arrival rate must be non-negative and finite, got {value}')
            return float(value)
        return extractRate(value)

    # Поиск массива gamma (интенсивностей внешних потоков в узлы сети)
    def findGamma(self, arrivals, entry):
        if entry is None:
            if isinstance(arrivals, (Real, NoDistribution)) or not hasattr(arrivals, '__len__'):
                raise InvalidModelParameter('Without an entry vector the arrivals must be given per node')
            if len(arrivals) != self.M:
                raise DimensionMismatch(f'External arrival vector has {len(arrivals)} entries, expected {self.M}')
            return np.array([self.externalRate(value) for value in arrivals])
        total = toRate(arrivals, 'lambda')
        entry = np.array(entry, dtype = float).reshape(-1)
        if entry.size != self.M:
            raise DimensionMismatch(f'Entry vector has {entry.size} entries, expected {self.M}')
        if (entry < 0).any() or abs(entry.sum() - 1) > self.ErrorRate:
            raise InvalidModelParameter('Entry vector must be a probability distribution over the nodes')
        return total * entry

    # Модель массового обслуживания узла i (нумерация с 1)
    def node(self, i):
        return self.models[checkNodeIndex(i, self.M) - 1]

    # Совместная вероятность состояния сети (произведение вероятностей узлов)
    def Pn(self, n):
        n = occupancyArray(n, self.M)
        if n.ndim == 1:
            return float(np.prod([self.models[i].Pn(n[i]) for i in range(self.M)]))
        return np.array([self.Pn(state) for state in n])

    def P0i(self, i):
        return self.node(i).Pn(0)

    # Вероятность n заявок в узле входа в сеть (первый узел)
    def Pi0(self, n):
        return self.models[0].Pn(n)

    def maxCustomers(self):
        return sum([model.maxCustomers() for model in self.models])

    # Вычисление характеристик узлов и сети в целом
    def findOut(self):
        nodeOut = {key: np.array([model.out[key] for model in self.models]) for key in ['l', 'lq', 'w', 'wq', 'rho', 'lambdaEff']}
        # Заявки, не принятые узлами с ограниченной ёмкостью, покидают сеть
        loss = self.lambdaArray - nodeOut['lambdaEff']
        throughput = self.gamma.sum() - loss.sum()
        l  = nodeOut['l'].sum()
        lq = nodeOut['lq'].sum()
        self.out = { 'lambda'    : np.array(self.lambdaArray),
                     'n'         : nodeOut['l'],
                     'no'        : nodeOut['lq'],
                     't'         : nodeOut['w'],
                     'to'        : nodeOut['wq'],
                     'rho'       : nodeOut['rho'],
                     'L'         : l,
                     'Lq'        : lq,
                     'W'         : l / throughput,
                     'Wq'        : lq / throughput,
                     'loss'      : loss,
                     'throughput': throughput }
        return

    def __repr__(self):
        return f'OpenJacksonNetwork(M = {self.M}, lambda = {list(self.lambdaArray)})'
