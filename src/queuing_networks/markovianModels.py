import numpy as np

from abc           import ABC, abstractmethod
from numbers       import Real
from scipy.special import gammainc, gammaln, logsumexp
from scipy.stats   import poisson

from queuing_networks.distributions import toRate
from queuing_networks.networkErrors import InvalidModelParameter, UnstableQueue

# Проверка целочисленного параметра модели
def checkInteger(value, name, minimum = 1):
    if not isinstance(value, Real) or isinstance(value, bool) or not np.isfinite(value) or value != int(value):
        raise InvalidModelParameter(f'Parameter "{name}" must be an integer, got {value}')
    if value < minimum:
        raise InvalidModelParameter(f'Parameter "{name}" must be >= {minimum}, got {value}')
    return int(value)

# Применение скалярной функции к числу или к массиву значений
def evaluate(function, values):
    array = np.asarray(values, dtype = float)
    result = np.vectorize(function, otypes = [float])(array)
    if array.ndim == 0:
        return float(result)
    return result

# Функция распределения Эрланга с k фазами интенсивности rate
def erlangCDF(k, rate, x):
    k = np.asarray(k, dtype = float)
    return np.where(k == 0, 1., gammainc(np.maximum(k, 1.), rate * x))

# Номер состояния n является допустимым числом заявок
def isState(n, maxN = np.inf):
    return bool(np.isfinite(n)) and n == int(n) and 0 <= n <= maxN

class MarkovianModel(ABC):

    def __init__(self, lambdaRate, mu):
        self.lambdaRate = toRate(lambdaRate, 'lambda')
        self.mu = toRate(mu, 'mu')
        self.out = {}

    @abstractmethod
    def probability(self, n):
        pass

    # Вероятность n заявок в системе в момент прихода новой заявки
    def arrivalProbability(self, n):
        return self.probability(n)

    @abstractmethod
    def systemWaitingCDF(self, x):
        pass

    @abstractmethod
    def queueWaitingCDF(self, x):
        pass

    def Pn(self, n):
        return evaluate(self.probability, n)

    def Qn(self, n):
        return evaluate(self.arrivalProbability, n)

    def FW(self, x):
        return evaluate(lambda t: 0. if t < 0 else self.systemWaitingCDF(t), x)

    def FWq(self, x):
        return evaluate(lambda t: 0. if t < 0 else self.queueWaitingCDF(t), x)

    def maxCustomers(self):
        return np.inf

    # Заполнение словаря основных характеристик модели
    def findOut(self, l, lq, lambdaEff, rho):
        w  = l / lambdaEff
        wq = lq / lambdaEff
        self.out = { 'l'  : l,
                     'lq' : lq,
                     'w'  : w,
                     'wq' : wq,
                     'rho': rho,
                     'eff': 1 / (self.mu * w),
                     'lambdaEff': lambdaEff }
        return

    def __repr__(self):
        return f'{type(self).__name__}(lambda = {self.lambdaRate}, mu = {self.mu})'

# M/M/S с неограниченной очередью
class M_M_S(MarkovianModel):

    def __init__(self, lambdaRate, mu, s = 1):
        super().__init__(lambdaRate, mu)
        self.s = checkInteger(s, 's')
        self.r = self.lambdaRate / self.mu
        self.rho = self.r / self.s
        if self.rho >= 1:
            raise UnstableQueue(f'Model is not stable: lambda = {self.lambdaRate} >= s * mu = {self.s * self.mu}')
        # Логарифмы слагаемых r^j / j! (j = 0..s)
        j = np.arange(self.s + 1)
        self.logTerms = j * np.log(self.r) - gammaln(j + 1)
        logTail = self.logTerms[self.s] - np.log(1 - self.rho)
        self.logNorm = logsumexp(np.append(self.logTerms[:self.s], logTail))
        self.P0 = float(np.exp(-self.logNorm))
        # Вероятность ожидания в очереди (формула Эрланга C)
        self.C = float(np.exp(logTail - self.logNorm))
        lq = self.C * self.rho / (1 - self.rho)
        self.findOut(lq + self.r, lq, self.lambdaRate, self.rho)

    def probability(self, n):
        if not isState(n):
            return 0.
        n = int(n)
        if n < self.s:
            return float(np.exp(self.logTerms[n] - self.logNorm))
        return float(np.exp(self.logTerms[self.s] - self.logNorm + (n - self.s) * np.log(self.rho)))

    def queueWaitingCDF(self, x):
        return 1 - self.C * np.exp(-(self.s * self.mu - self.lambdaRate) * x)

    def systemWaitingCDF(self, x):
        d = self.s - 1 - self.r
        if abs(d) < 1e-12:
            tail = np.exp(-self.mu * x) * (1 + self.C * self.mu * x)
        else:
            tail = np.exp(-self.mu * x) * (1 + self.C * (1 - np.exp(-self.mu * x * d)) / d)
        return 1 - tail

    def __repr__(self):
        return f'{type(self).__name__}(lambda = {self.lambdaRate}, mu = {self.mu}, s = {self.s})'

class M_M_1(M_M_S):

    def __init__(self, lambdaRate, mu):
        super().__init__(lambdaRate, mu, 1)

# Процесс гибели и размножения с конечным числом состояний 0..maxN
class FiniteMarkovianModel(MarkovianModel):

    def __init__(self, lambdaRate, mu, s, maxN):
        super().__init__(lambdaRate, mu)
        self.s = checkInteger(s, 's')
        self.maxN = maxN
        birthRates = self.birthRates()
        deathRates = np.minimum(np.arange(1, self.maxN + 1), self.s) * self.mu
        logWeights = np.concatenate(([0.], np.cumsum(np.log(birthRates / deathRates))))
        self.P = np.exp(logWeights - logsumexp(logWeights))
        arrivals = np.append(birthRates, 0.) * self.P
        lambdaEff = arrivals.sum()
        self.Q = arrivals / lambdaEff
        states = np.arange(self.maxN + 1)
        l  = float(np.dot(states, self.P))
        lq = float(np.dot(np.maximum(states - self.s, 0), self.P))
        self.findOut(l, lq, lambdaEff, (l - lq) / self.s)

    # Интенсивности поступления заявок в состояниях 0..maxN-1
    @abstractmethod
    def birthRates(self):
        pass

    def probability(self, n):
        if not isState(n, self.maxN):
            return 0.
        return float(self.P[int(n)])

    def arrivalProbability(self, n):
        if not isState(n, self.maxN):
            return 0.
        return float(self.Q[int(n)])

    def maxCustomers(self):
        return self.maxN

    def queueWaitingCDF(self, x):
        waiting = np.arange(self.s, self.maxN + 1)
        result = self.Q[:self.s].sum()
        result += np.dot(self.Q[self.s:], erlangCDF(waiting - self.s + 1, self.s * self.mu, x))
        return float(result)

    def systemWaitingCDF(self, x):
        k = np.arange(self.s, self.maxN + 1) - self.s + 1
        result = self.Q[:self.s].sum() * (1 - np.exp(-self.mu * x))
        if self.s == 1:
            inQueue = erlangCDF(k + 1, self.mu, x)
        else:
            # Сумма Эрланга(k, s * mu) и экспоненциального(mu) времени обслуживания
            a = self.s * self.mu
            inQueue = erlangCDF(k, a, x) - np.exp(-self.mu * x) * ((a / (a - self.mu)) ** k) * erlangCDF(k, a - self.mu, x)
        result += np.dot(self.Q[self.s:], inQueue)
        return float(result)

# M/M/S/K: ограниченная ёмкость K
class M_M_S_K(FiniteMarkovianModel):

    def __init__(self, lambdaRate, mu, s, k):
        s = checkInteger(s, 's')
        self.k = checkInteger(k, 'k', s)
        super().__init__(lambdaRate, mu, s, self.k)

    def birthRates(self):
        return np.full(self.k, self.lambdaRate)

    def __repr__(self):
        return f'{type(self).__name__}(lambda = {self.lambdaRate}, mu = {self.mu}, s = {self.s}, k = {self.k})'

class M_M_1_K(M_M_S_K):

    def __init__(self, lambdaRate, mu, k):
        super().__init__(lambdaRate, mu, 1, k)

# M/M/S/inf/H/Y: H источников заявок и Y резервных источников
class M_M_S_INF_H_Y(FiniteMarkovianModel):

    def __init__(self, lambdaRate, mu, s, h, y):
        self.h = checkInteger(h, 'h')
        self.y = checkInteger(y, 'y', 0)
        super().__init__(lambdaRate, mu, s, self.h + self.y)

    def birthRates(self):
        n = np.arange(self.maxN)
        return self.lambdaRate * np.minimum(self.h, self.h + self.y - n)

    def __repr__(self):
        return f'{type(self).__name__}(lambda = {self.lambdaRate}, mu = {self.mu}, s = {self.s}, h = {self.h}, y = {self.y})'

class M_M_S_INF_H(M_M_S_INF_H_Y):

    def __init__(self, lambdaRate, mu, s, h):
        super().__init__(lambdaRate, mu, s, h, 0)

class M_M_1_INF_H(M_M_S_INF_H_Y):

    def __init__(self, lambdaRate, mu, h):
        super().__init__(lambdaRate, mu, 1, h, 0)

# M/M/inf: каждая заявка обслуживается сразу
class M_M_INF(MarkovianModel):

    def __init__(self, lambdaRate, mu):
        super().__init__(lambdaRate, mu)
        self.r = self.lambdaRate / self.mu
        self.findOut(self.r, 0., self.lambdaRate, self.r)

    def probability(self, n):
        if not isState(n):
            return 0.
        return float(poisson.pmf(int(n), self.r))

    def queueWaitingCDF(self, x):
        return 1.

    def systemWaitingCDF(self, x):
        return 1 - np.exp(-self.mu * x)
