import numpy as np

from enum    import Enum
from numbers import Real

from queuing_networks.networkErrors import InvalidDistributionKind, InvalidModelParameter, UndefinedRate

# Поддерживаемые виды распределений
class DistributionKind(Enum):
    EXPONENTIAL = 'expon'
    NONE        = 'no_distr'

# Пустое распределение: отсутствие потока заявок в узле сети
class NoDistribution():

    def __repr__(self):
        return 'no_distr()'

    def __eq__(self, other):
        return isinstance(other, NoDistribution)

    def __hash__(self):
        return hash(DistributionKind.NONE)

NO_DISTR = NoDistribution()

def no_distr():
    return NO_DISTR

# Определение вида распределения (scipy.stats.expon без сдвига или no_distr)
def distributionKind(distribution):
    if isinstance(distribution, NoDistribution):
        return DistributionKind.NONE
    dist = getattr(distribution, 'dist', None)
    if getattr(dist, 'name', None) == DistributionKind.EXPONENTIAL.value:
        lower, _ = distribution.support()
        if lower == 0:
            return DistributionKind.EXPONENTIAL
        raise InvalidDistributionKind(f'Shifted exponential distribution (loc = {lower}) is not supported')
    raise InvalidDistributionKind(f'Distribution {distribution!r} must be a scipy.stats.expon object or no_distr()')

# Интенсивность экспоненциального распределения (lambda или mu)
def extractRate(distribution):
    kind = distributionKind(distribution)
    if kind == DistributionKind.NONE:
        raise UndefinedRate('Rate of no_distr() is not defined')
    rate = 1 / distribution.std()
    if not np.isfinite(rate) or rate <= 0:
        raise InvalidModelParameter(f'Rate must be positive and finite, got {rate}')
    return float(rate)

# Интенсивность из числа или из распределения
def toRate(value, name = 'rate'):
    if isinstance(value, Real) and not isinstance(value, bool):
        rate = float(value)
        if not np.isfinite(rate) or rate <= 0:
            raise InvalidModelParameter(f'Parameter "{name}" must be positive and finite, got {value}')
        return rate
    return extractRate(value)
