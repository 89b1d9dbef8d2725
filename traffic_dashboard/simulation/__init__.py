# ==============================================
# SIMULATION
# ==============================================
#
# Pluggable training / prediction collaborators. The built-in
# implementations return pseudo-random placeholders; no model is
# trained. The analysis package never depends on this one.
#
# Modules:
# --------
# - models.py    → ModelConfig, ModelMetrics, PredictionRequest/Result
# - simulator.py → Trainer / Predictor interfaces + simulated versions
#
# ==============================================

from .models import (
    AVAILABLE_FEATURES,
    ModelType,
    ModelConfig,
    TrainingProgress,
    ModelMetrics,
    PredictionRequest,
    PredictionResult,
    confidence_band,
)
from .simulator import Trainer, Predictor, SimulatedTrainer, SimulatedPredictor

__all__ = [
    "AVAILABLE_FEATURES",
    "ModelType",
    "ModelConfig",
    "TrainingProgress",
    "ModelMetrics",
    "PredictionRequest",
    "PredictionResult",
    "confidence_band",
    "Trainer",
    "Predictor",
    "SimulatedTrainer",
    "SimulatedPredictor",
]
