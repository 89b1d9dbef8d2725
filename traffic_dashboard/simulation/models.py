# ==============================================
# Simulation Models (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes exchanged with the training / prediction
#   collaborators. The aggregation layer never imports these.
#
# ENUMS:
# ------
# - ModelType(Enum): LINEAR, NEURAL, ENSEMBLE
#
# CLASSES:
# --------
# - ModelConfig (dataclass)
#     model_type, features, validation_split in (0, 1),
#     epochs, batch_size, hyperparameters.
#     Validated on construction (SimulationConfigError).
#
# - TrainingProgress (dataclass)
#     Snapshot passed to the on_progress callback while training.
#
# - ModelMetrics (dataclass)
#     accuracy, mse, mae, r2_score, training_time
#
# - PredictionRequest (dataclass)
#     date, time, location, weather, temperature, is_weekend, is_holiday
#
# - PredictionResult (dataclass)
#     predicted, confidence, timestamp, actual
#     lower_bound / upper_bound = predicted * (1 ∓ (1 - confidence) * 0.5)
#
# ==============================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple

from traffic_dashboard.exceptions import SimulationConfigError


class ModelType(Enum):
    """
    Model families offered by the training view.

    - LINEAR: Fast, interpretable baseline
    - NEURAL: Captures non-linear patterns
    - ENSEMBLE: Combines multiple models
    """
    LINEAR = "linear"
    NEURAL = "neural"
    ENSEMBLE = "ensemble"


AVAILABLE_FEATURES = (
    "volume", "speed", "occupancy", "hour", "day_of_week", "month",
    "temperature", "weather", "is_weekend", "is_holiday",
)

DEFAULT_FEATURES = ("volume", "speed", "occupancy", "hour", "day_of_week")


def _default_hyperparameters() -> Dict[str, Any]:
    return {"learning_rate": 0.001, "hidden_layers": [64, 32], "dropout": 0.2}


@dataclass
class ModelConfig:
    """
    Options for one simulated training run.
    """

    model_type: ModelType = ModelType.NEURAL
    features: Set[str] = field(default_factory=lambda: set(DEFAULT_FEATURES))
    validation_split: float = 0.2
    epochs: Optional[int] = 100
    batch_size: Optional[int] = 32
    hyperparameters: Dict[str, Any] = field(default_factory=_default_hyperparameters)

    def __post_init__(self):
        if isinstance(self.model_type, str):
            try:
                self.model_type = ModelType(self.model_type.lower())
            except ValueError:
                raise SimulationConfigError(
                    f"Unknown model type '{self.model_type}', "
                    f"expected one of {[m.value for m in ModelType]}"
                ) from None

        self.features = set(self.features)
        unknown = self.features - set(AVAILABLE_FEATURES)
        if unknown:
            raise SimulationConfigError(f"Unknown features: {sorted(unknown)}")

        if not 0 < self.validation_split < 1:
            raise SimulationConfigError("validation_split must be between 0 and 1 (exclusive)")

        if self.epochs is not None and self.epochs <= 0:
            raise SimulationConfigError("epochs must be a positive integer")

        if self.batch_size is not None and self.batch_size <= 0:
            raise SimulationConfigError("batch_size must be a positive integer")

    def split_sizes(self, record_count: int) -> Tuple[int, int]:
        """
        Number of records that would go to training and validation.

        Returns:
            (training_count, validation_count)
        """
        validation = int(record_count * self.validation_split)
        return record_count - validation, validation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model_type": self.model_type.value,
            "features": sorted(self.features),
            "validation_split": self.validation_split,
            "epochs": self.epochs,
            "batch_size": self.batch_size,
            "hyperparameters": dict(self.hyperparameters),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelConfig":
        return cls(
            model_type=data.get("model_type", ModelType.NEURAL.value),
            features=set(data.get("features", DEFAULT_FEATURES)),
            validation_split=data.get("validation_split", 0.2),
            epochs=data.get("epochs", 100),
            batch_size=data.get("batch_size", 32),
            hyperparameters=data.get("hyperparameters", _default_hyperparameters()),
        )


@dataclass
class TrainingProgress:
    """Progress snapshot reported after each simulated step."""

    percent: float
    epoch: int
    total_epochs: int
    accuracy: float
    loss: float
    val_accuracy: float

    @property
    def estimated_seconds_remaining(self) -> int:
        return max(0, round((100 - self.percent) * 2))

    @classmethod
    def at(cls, percent: float, total_epochs: int) -> "TrainingProgress":
        fraction = percent / 100
        return cls(
            percent=percent,
            epoch=round(fraction * total_epochs),
            total_epochs=total_epochs,
            accuracy=round(0.8 + fraction * 0.15, 4),
            loss=round(100 - percent * 0.5, 4),
            val_accuracy=round(0.75 + fraction * 0.2, 4),
        )


@dataclass
class ModelMetrics:
    """Placeholder evaluation figures for a finished run."""

    accuracy: float
    mse: float
    mae: float
    r2_score: float
    training_time: float

    @property
    def rating(self) -> str:
        if self.accuracy > 0.9:
            return "Excellent"
        if self.accuracy > 0.8:
            return "Good"
        return "Needs Improvement"

    @property
    def production_ready(self) -> bool:
        return self.accuracy > 0.85

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accuracy": self.accuracy,
            "mse": self.mse,
            "mae": self.mae,
            "r2_score": self.r2_score,
            "training_time": self.training_time,
        }


@dataclass
class PredictionRequest:
    """Inputs from the prediction form."""

    date: str
    time: str
    location: str = "Highway 101"
    weather: str = "clear"
    temperature: Optional[float] = 70.0
    is_weekend: bool = False
    is_holiday: bool = False


@dataclass
class PredictionResult:
    """One simulated prediction."""

    predicted: int
    confidence: float
    timestamp: str
    actual: Optional[int] = None

    @property
    def upper_bound(self) -> float:
        return self.predicted * (1 + (1 - self.confidence) * 0.5)

    @property
    def lower_bound(self) -> float:
        return self.predicted * (1 - (1 - self.confidence) * 0.5)

    @property
    def error(self) -> Optional[int]:
        if self.actual is None:
            return None
        return abs(self.predicted - self.actual)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predicted": self.predicted,
            "confidence": self.confidence,
            "timestamp": self.timestamp,
            "actual": self.actual,
            "lower_bound": round(self.lower_bound, 1),
            "upper_bound": round(self.upper_bound, 1),
        }


def confidence_band(results: List[PredictionResult]) -> List[Dict[str, Any]]:
    """Chart rows for the prediction view, oldest first."""
    return [
        {
            "timestamp": result.timestamp,
            "predicted": result.predicted,
            "confidence": round(result.confidence * 100, 1),
            "lower_bound": round(result.lower_bound, 1),
            "upper_bound": round(result.upper_bound, 1),
        }
        for result in reversed(results)
    ]
