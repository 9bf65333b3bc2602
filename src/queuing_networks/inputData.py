import numpy as np

from re import sub

from queuing_networks.closedJacksonNetwork import ClosedJacksonNetwork
from queuing_networks.networkErrors        import InvalidModelParameter
from queuing_networks.nodeSpec             import NodeSpec
from queuing_networks.openJacksonNetwork   import OpenJacksonNetwork

ParameterNames = { 'M' : 'Количество узлов (приборов) в сети',
                   'N' : 'Количество заявок в замкнутой сети',
                   'E' : 'Допустимое отклонение суммы строки матрицы передач от 1',
                   'MU': 'Интенсивность обслуживания заявок в узлах сети (размер - M)',
                   'K' : 'Число каналов обслуживания в узлах сети, 0 - бесконечно (размер - M)',
                   'C' : 'Ёмкость узлов сети, 0 - без ограничения (размер - M)',
                   'L' : 'Интенсивность внешнего потока в узлы открытой сети (размер - M)',
                   'Q' : 'Матрица передач, определяющая маршрутизацию заявок в сети (размер - M x M)' }

# Получение из входного файла значений параметров сети
def getInputParameter(inputFile):
    ParameterDict = {}
    flagQ = False
    for line in inputFile:
        lineParamIndex = line.find('=')
        if lineParamIndex > -1 or flagQ:
            paramName = line[:lineParamIndex].strip().upper() if lineParamIndex > -1 else 'Q'
            if paramName not in ParameterNames:
                raise InvalidModelParameter(f'Unknown parameter "{paramName}"')
            lineParam  = sub(r'[^0-9\.eE+\-]', ' ', line[(lineParamIndex + 1):])
            paramArray = sub(r'\s+', ' ', lineParam.strip()).split()
            try:
                values = list(map(float, paramArray))
            except ValueError:
                raise InvalidModelParameter(f'Incorrect value of parameter "{paramName}"') from None
            if paramName == 'Q':
                ParameterDict['Q'] = (ParameterDict['Q'] if flagQ else []) + values
                M = ParameterDict.get('M', [0])[0]
                flagQ = len(ParameterDict['Q']) < M ** 2
            else:
                flagQ = False
                ParameterDict[paramName] = values
    return checkInputParameter(ParameterDict)

# Массив параметра размера M (значение по умолчанию - default)
def nodeArray(ParameterDict, name, M, default = None):
    if name not in ParameterDict:
        if default is None:
            raise InvalidModelParameter(f'Parameter "{name}" is missing')
        return np.full(M, default)
    array = np.array(ParameterDict[name])
    if array.size != M:
        raise InvalidModelParameter(f'Parameter "{name}" must have {M} values, got {array.size}')
    return array

# Проверка размеров и значений параметров сети
def checkInputParameter(ParameterDict):
    if len(ParameterDict.get('M', [])) != 1 or ParameterDict['M'][0] < 1:
        raise InvalidModelParameter('Parameter "M" must be a single positive number')
    M = int(ParameterDict['M'][0])
    Q = nodeArray(ParameterDict, 'Q', M ** 2).reshape(M, M)
    K = nodeArray(ParameterDict, 'K', M, 1.)
    C = nodeArray(ParameterDict, 'C', M, 0.)
    result = { 'M' : M,
               'N' : None,
               'E' : ParameterDict.get('E', [1e-9])[0],
               'MU': nodeArray(ParameterDict, 'MU', M),
               'K' : np.where(K == 0, np.inf, K),
               'C' : np.where(C == 0, np.inf, C),
               'L' : None,
               'Q' : Q }
    if 'L' in ParameterDict:
        result['L'] = nodeArray(ParameterDict, 'L', M)
    elif len(ParameterDict.get('N', [])) == 1:
        result['N'] = ParameterDict['N'][0]
    else:
        raise InvalidModelParameter('Either external arrival rates "L" or population "N" must be given')
    return result

# Открытие файла с заданными параметрами сети
def readInputFile(inputFileName):
    with open(inputFileName, 'r', encoding = 'utf-8') as inputFile:
        return getInputParameter(inputFile)

# Построение открытой (задан L) или замкнутой (задан N) сети
def buildNetwork(ParameterDict):
    nodes = [NodeSpec(ParameterDict['MU'][i], ParameterDict['K'][i], ParameterDict['C'][i]) for i in range(ParameterDict['M'])]
    if ParameterDict['L'] is not None:
        return OpenJacksonNetwork(nodes, ParameterDict['Q'], ParameterDict['L'], errorRate = ParameterDict['E'])
    return ClosedJacksonNetwork(nodes, ParameterDict['Q'], ParameterDict['N'], errorRate = ParameterDict['E'])
