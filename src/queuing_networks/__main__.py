import sys

from queuing_networks.inputData     import buildNetwork, readInputFile
from queuing_networks.networkErrors import NetworkError

FileName = './data/InputData_Closed.dat'

# Отображение полученного результата
def printResult(net):
    print('\n  ', net)
    for name in ['lambda', 'n', 'no', 't', 'to', 'rho']:
        print(f'\n   {name} =', net.out[name])
    if 'V' in net.out:
        print('\n   V =', net.out['V'])
    else:
        print('\n   L =', net.out['L'], '  W =', net.out['W'])
    print('\n   maxCustomers =', net.maxCustomers(), '\n')
    return

# Главная функция
def main(inputFileName):
    try:
        net = buildNetwork(readInputFile(inputFileName))
    except FileNotFoundError:
        print(f'\n   ERROR! Requested file "{inputFileName}" not found!\n')
        return 1
    except NetworkError as error:
        print(f'\n   ERROR! {type(error).__name__}: {error}\n')
        return 1
    printResult(net)
    return 0

if __name__ == '__main__':
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else FileName))
