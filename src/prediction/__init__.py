"""
WristType Prediction Module

Character n-gram language model and tap-by-tap word prediction.
"""
from .beam import TopN, WeightedString
from .config import Config, load_config
from .errors import DimensionMismatchError, InvalidStateError, UnsupportedSymbolError
from .language_model import LanguageModel
from .predictor import PredictionResult, PredictorState, WordPredictor
from .text_stats import TextStats

__all__ = [
    'TopN',
    'WeightedString',
    'Config',
    'load_config',
    'DimensionMismatchError',
    'InvalidStateError',
    'UnsupportedSymbolError',
    'LanguageModel',
    'PredictionResult',
    'PredictorState',
    'WordPredictor',
    'TextStats',
]
