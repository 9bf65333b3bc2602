import numpy as np

from scipy.linalg import LinAlgError, solve

from queuing_networks.networkErrors import InvalidModelParameter, NodeCountMismatch, NonPositiveNodeRate, UnstableNetworkTopology

ZeroRate = 1e-12  # Интенсивности не больше этого значения считаются нулевыми

# Проверка матрицы передач (размер - M x M, элементы - вероятности)
def checkRoutingMatrix(Q, M = None):
    Q = np.array(Q, dtype = float)
    if Q.ndim != 2 or Q.shape[0] != Q.shape[1]:
        raise NodeCountMismatch(f'Routing matrix must be square, got shape {Q.shape}')
    if M is not None and Q.shape[0] != M:
        raise NodeCountMismatch(f'Routing matrix size {Q.shape[0]} does not match node count {M}')
    if not np.isfinite(Q).all() or (Q < 0).any() or (Q > 1).any():
        raise InvalidModelParameter('Routing matrix entries must be probabilities in [0, 1]')
    return Q

# Решение системы (I - Q^T) * lambda = gamma для открытой сети
def solveTrafficEquations(Q, gamma, errorRate = 1e-9):
    Q = checkRoutingMatrix(Q)
    M = Q.shape[0]
    gamma = np.array(gamma, dtype = float).reshape(-1)
    if gamma.size != M:
        raise NodeCountMismatch(f'External arrival vector has {gamma.size} entries, expected {M}')
    if not np.isfinite(gamma).all() or (gamma < 0).any():
        raise InvalidModelParameter('External arrival rates must be non-negative and finite')
    if (Q.sum(axis = 1) > 1 + errorRate).any():
        raise InvalidModelParameter('Rows of an open routing matrix must sum to at most 1')
    A = np.eye(M) - np.transpose(Q)
    try:
        lambdaArray = solve(A, gamma)
    except LinAlgError:
        raise UnstableNetworkTopology('Traffic equations are singular: customers may circulate forever') from None
    checkRates(lambdaArray, 'Arrival rate')
    return lambdaArray

# Поиск массива W (коэффициентов посещения узлов) для замкнутой сети
def solveVisitRatios(Q):
    Q = checkRoutingMatrix(Q)
    M = Q.shape[0]
    A = np.copy(np.transpose(Q))
    B = np.zeros(M)
    for i in range(M):
        A[i][i] = A[i][i] - 1
    A[-1] = np.ones(M)
    B[-1] = 1
    try:
        W = solve(A, B)
    except LinAlgError:
        raise UnstableNetworkTopology('Visit ratios are not unique: routing matrix is not irreducible') from None
    checkRates(W, 'Visit ratio')
    return W

# Проверка положительности интенсивностей в узлах
def checkRates(rateArray, name):
    if not np.isfinite(rateArray).all():
        raise UnstableNetworkTopology(f'{name} is not finite')
    for i, rate in enumerate(rateArray):
        if rate <= ZeroRate:
            raise NonPositiveNodeRate(f'{name} at node {i + 1} is not positive ({rate})')
    return
