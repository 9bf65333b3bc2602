# Базовый класс ошибок при расчёте моделей и сетей массового обслуживания
class NetworkError(ValueError):
    pass

# Распределение не является экспоненциальным
class InvalidDistributionKind(NetworkError):
    pass

# Передан пустой объект распределения (no_distr)
class UndefinedRate(NetworkError):
    pass

# Система уравнений баланса вырождена (бесконечная циркуляция заявок)
class UnstableNetworkTopology(NetworkError):
    pass

# Интенсивность потока в узле сети не положительна
class NonPositiveNodeRate(NetworkError):
    pass

# Номер узла вне диапазона 1..M
class NodeIndexOutOfRange(NetworkError, IndexError):
    pass

# Длина вектора состояний не совпадает с количеством узлов
class DimensionMismatch(NetworkError):
    pass

# Количество заявок в замкнутой сети меньше 1
class PopulationNotPositive(NetworkError):
    pass

# Сумма строки матрицы передач замкнутой сети отлична от 1
class NonConservativeRouting(NetworkError):
    pass

# Количество узлов не совпадает с размером матрицы передач
class NodeCountMismatch(NetworkError):
    pass

# Сумма вектора состояний не равна количеству заявок в сети
class PopulationMismatch(NetworkError):
    pass

# Узел без ограничения на длину очереди перегружен (lambda >= s * mu)
class UnstableQueue(NetworkError):
    pass

# Некорректное значение параметра модели
class InvalidModelParameter(NetworkError):
    pass
