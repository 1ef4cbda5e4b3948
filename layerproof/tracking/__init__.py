from .mlflow_logger import MlflowLogger

__all__ = ["MlflowLogger"]
