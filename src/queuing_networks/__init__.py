from .distributions        import DistributionKind, distributionKind, extractRate, no_distr, toRate
from .markovianModels      import (MarkovianModel, M_M_1, M_M_S, M_M_1_K, M_M_S_K, M_M_1_INF_H, M_M_S_INF_H,
                                   M_M_S_INF_H_Y, M_M_INF)
from .nodeSpec             import NodeSpec
from .trafficEquations     import solveTrafficEquations, solveVisitRatios
from .openJacksonNetwork   import OpenJacksonNetwork
from .convolution          import ConvolutionEngine
from .closedJacksonNetwork import ClosedJacksonNetwork
from .inputData            import buildNetwork, readInputFile
from .networkErrors        import *
