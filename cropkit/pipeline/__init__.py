"""
Pipeline configuration and execution.
"""
from .builder import PipelineBuilder
from .executor import TransformExecutor, ExecutorSettings
from .upload import LocalUpload

__all__ = [
    'PipelineBuilder',
    'TransformExecutor',
    'ExecutorSettings',
    'LocalUpload',
]
