import numpy as np

from queuing_networks.markovianModels  import checkInteger
from queuing_networks.networkErrors    import InvalidModelParameter, NodeCountMismatch, NonConservativeRouting, PopulationNotPositive
from queuing_networks.nodeSpec         import NodeSpec
from queuing_networks.trafficEquations import checkRoutingMatrix, solveVisitRatios

# Свёртка весов узлов: G[j][n] - нормирующая константа первых j узлов при n заявках
def convolve(g, N):
    G = np.zeros((len(g) + 1, N + 1))
    G[0][0] = 1.
    for j in range(1, len(g) + 1):
        for n in range(N + 1):
            G[j][n] = np.dot(g[j - 1][:(n + 1)], G[j - 1][n::-1])
    return G

# Алгоритм свёртки (Бузена) для замкнутой сети
class ConvolutionEngine():

    def __init__(self, nodes, Q, N, errorRate = 1e-9):
        N = checkInteger(N, 'N', -np.inf)
        if N < 1:
            raise PopulationNotPositive(f'Population must be at least 1, got {N}')
        self.N = int(N)              # Количество заявок в сети
        self.nodes = tuple(nodes)
        self.M = len(self.nodes)     # Количество узлов (приборов) в сети
        self.ErrorRate = errorRate   # Допустимое отклонение суммы строки матрицы передач от 1
        if self.M == 0 or not all([isinstance(node, NodeSpec) for node in self.nodes]):
            raise InvalidModelParameter('Network nodes must be a non-empty sequence of NodeSpec')
        self.Q = checkRoutingMatrix(Q)
        if self.Q.shape[0] != self.M:
            raise NodeCountMismatch(f'Routing matrix size {self.Q.shape[0]} does not match node count {self.M}')
        rowSums = self.Q.sum(axis = 1)
        for i in range(self.M):
            if abs(rowSums[i] - 1) > self.ErrorRate:
                raise NonConservativeRouting(f'Row {i + 1} of the routing matrix sums to {rowSums[i]}, expected 1')
        if sum([min(node.capacity, self.N) for node in self.nodes]) < self.N:
            raise InvalidModelParameter(f'Population {self.N} exceeds the total capacity of the network nodes')
        self.W = self.scaleVisitRatios(solveVisitRatios(self.Q))
        self.g = self.findWeights()
        self.G = convolve(self.g, self.N)
        for array in (self.Q, self.W, self.g, self.G):
            array.setflags(write = False)
        self.excludedDict = {}
        self.marginalDict = {}

    # Масштабирование коэффициентов посещений: максимальная загрузка канала узла равна 1
    def scaleVisitRatios(self, W):
        load = [W[j] / (self.nodes[j].mu * min(self.nodes[j].servers, self.N)) for j in range(self.M)]
        return W / max(load)

    # Ненормированные веса g[j][n] состояний отдельных узлов
    def findWeights(self):
        g = np.zeros((self.M, self.N + 1))
        for j in range(self.M):
            node = self.nodes[j]
            g[j][0] = 1.
            for n in range(1, min(self.N, node.capacity) + 1):
                g[j][n] = g[j][n - 1] * self.W[j] / node.serviceRate(n)
        return g

    def normalizationConstant(self, n = None):
        if n is None:
            n = self.N
        return float(self.G[self.M][n])

    # Нормирующие константы сети без узла j
    def excludedConstants(self, j):
        if j not in self.excludedDict:
            self.excludedDict[j] = convolve(np.delete(self.g, j, axis = 0), self.N)[-1]
        return self.excludedDict[j]

    # Распределение числа заявок в узле j (нумерация с 0)
    def marginal(self, j):
        if j not in self.marginalDict:
            P = self.g[j] * self.excludedConstants(j)[::-1] / self.normalizationConstant()
            P.setflags(write = False)
            self.marginalDict[j] = P
        return self.marginalDict[j]

    # Пропускная способность узла j
    def throughput(self, j):
        return float(self.W[j] * self.G[self.M][self.N - 1] / self.G[self.M][self.N])

    def meanCustomers(self, j):
        return float(np.dot(np.arange(self.N + 1), self.marginal(j)))

    # Средняя длина очереди в узле j
    def meanQueue(self, j):
        servers = self.nodes[j].servers
        if servers == np.inf:
            return 0.
        return float(np.dot(np.maximum(np.arange(self.N + 1) - servers, 0), self.marginal(j)))

    # Загрузка узла j (для узла с бесконечным числом каналов - среднее число заявок)
    def utilization(self, j):
        node = self.nodes[j]
        if node.servers == np.inf:
            return self.meanCustomers(j)
        return self.throughput(j) / (node.servers * node.mu)

    # Ненормированный вес состояния сети
    def jointWeight(self, n):
        if (np.asarray(n) > self.N).any():
            return 0.
        return float(np.prod([self.g[j][n[j]] for j in range(self.M)]))
