from .date_normalizer import DateNormalizer
from .volume_calculator import VolumeCalculator
from .volume_aggregator import VolumeAggregator
from .weight_converter import WeightConverter

__all__ = ["DateNormalizer", "VolumeCalculator", "VolumeAggregator", "WeightConverter"]
