import numpy as np

from queuing_networks.convolution     import ConvolutionEngine
from queuing_networks.markovianModels import evaluate, isState
from queuing_networks.networkErrors   import PopulationMismatch
from queuing_networks.nodeSpec        import checkNodeIndex, occupancyArray

class ClosedJacksonNetwork():

    def __init__(self, nodes, Q, N, errorRate = 1e-9):
        self.engine = ConvolutionEngine(nodes, Q, N, errorRate)
        self.nodes = self.engine.nodes
        self.M = self.engine.M   # Количество узлов (приборов) в сети
        self.N = self.engine.N   # Количество заявок в сети
        self.findOut()

    # Вероятность n заявок в узле i (n - число или последовательность)
    def Pi(self, n, i):
        P = self.engine.marginal(checkNodeIndex(i, self.M) - 1)
        return evaluate(lambda k: float(P[int(k)]) if isState(k, self.N) else 0., n)

    # Совместная вероятность состояния сети
    def Pn(self, n):
        n = occupancyArray(n, self.M)
        if n.ndim == 2:
            return np.array([self.Pn(state) for state in n])
        if n.sum() != self.N:
            raise PopulationMismatch(f'Occupancy vector sums to {n.sum()}, expected {self.N}')
        return self.engine.jointWeight(n) / self.engine.normalizationConstant()

    def maxCustomers(self):
        return self.N

    # Вычисление характеристик узлов сети
    def findOut(self):
        lambdaArray = np.array([self.engine.throughput(j) for j in range(self.M)])
        jArray = np.array([self.engine.meanCustomers(j) for j in range(self.M)])
        no = np.array([self.engine.meanQueue(j) for j in range(self.M)])
        t  = jArray / lambdaArray
        to = no / lambdaArray
        # Среднее время одного цикла заявки через узел i
        V = self.N / lambdaArray
        self.out = { 'lambda': lambdaArray,
                     'n'     : jArray,
                     'no'    : no,
                     't'     : t,
                     'to'    : to,
                     'rho'   : np.array([self.engine.utilization(j) for j in range(self.M)]),
                     'V'     : V,
                     'G'     : self.engine.normalizationConstant() }
        return

    def __repr__(self):
        return f'ClosedJacksonNetwork(M = {self.M}, N = {self.N})'
