"""Contract, estimation and batch providers"""

from .estimate import Estimate, RpcEstimateProvider
from .provider import ContractAbstraction, RpcContractProvider
from .batch import OperationBatch, RpcBatchProvider

__all__ = [
    "Estimate",
    "RpcEstimateProvider",
    "ContractAbstraction",
    "RpcContractProvider",
    "OperationBatch",
    "RpcBatchProvider",
]
