from analysis_bridge.base import AnalysisRunner
from analysis_bridge.errors import (
    AnalysisFailure,
    BridgeError,
    ExecutionFailure,
    ExecutionTimeout,
    NoResultFound,
)
from analysis_bridge.extractor import Extraction, LineOutcome, extract, scan
from analysis_bridge.gateway import AnalysisGateway, build_arguments
from analysis_bridge.invoker import ProcessInvocation, invoke
from analysis_bridge.runners import CannedAnalysisRunner, build_runner

__all__ = [
    "AnalysisRunner",
    "AnalysisFailure",
    "BridgeError",
    "ExecutionFailure",
    "ExecutionTimeout",
    "NoResultFound",
    "Extraction",
    "LineOutcome",
    "extract",
    "scan",
    "AnalysisGateway",
    "build_arguments",
    "ProcessInvocation",
    "invoke",
    "CannedAnalysisRunner",
    "build_runner",
]
