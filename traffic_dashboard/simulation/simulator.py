# ==============================================
# Simulated Trainer / Predictor
# ==============================================
#
# PURPOSE:
#   Stand-ins for a real model. "Training" steps a progress bar and
#   ends with random metrics; "prediction" returns a random volume.
#   Nothing here reads the traffic data beyond counting it.
#
# INTERFACES:
# -----------
# - Trainer (ABC)
#     train(config, records, on_progress=None) -> ModelMetrics
# - Predictor (ABC)
#     predict(request) -> PredictionResult
#
# IMPLEMENTATIONS:
# ----------------
# - SimulatedTrainer
#     training_steps progress callbacks, optional sleep between steps,
#     metrics drawn from fixed ranges.
# - SimulatedPredictor
#     optional delay, predicted in [50, 150], confidence in [0.80, 0.95].
#
#   Both take a random.Random; pass a seed through SimulationConfig for
#   reproducible runs.
#
# ==============================================

import logging
import random
import time
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, List, Optional

from traffic_dashboard.config import SimulationConfig
from traffic_dashboard.normalization import TrafficRecord
from .models import (
    ModelConfig,
    ModelMetrics,
    PredictionRequest,
    PredictionResult,
    TrainingProgress,
)


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[TrainingProgress], None]


class Trainer(ABC):
    """Anything that can turn a config and records into model metrics."""

    @abstractmethod
    def train(
        self,
        config: ModelConfig,
        records: List[TrafficRecord],
        on_progress: Optional[ProgressCallback] = None
    ) -> ModelMetrics:
        raise NotImplementedError


class Predictor(ABC):
    """Anything that can answer a prediction request."""

    @abstractmethod
    def predict(self, request: PredictionRequest) -> PredictionResult:
        raise NotImplementedError


class SimulatedTrainer(Trainer):
    """
    Timer-driven fake training run.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Args:
            config: Step count and delay. Defaults to SimulationConfig().
            rng: Random source. Seeded from config.seed when omitted.
            sleep: Called between steps (replaceable in tests)
        """
        self.config = config or SimulationConfig()
        self.rng = rng or random.Random(self.config.seed)
        self._sleep = sleep

    def train(
        self,
        config: ModelConfig,
        records: List[TrafficRecord],
        on_progress: Optional[ProgressCallback] = None
    ) -> ModelMetrics:
        steps = max(1, self.config.training_steps)
        total_epochs = config.epochs or steps
        train_count, validation_count = config.split_sizes(len(records))

        logger.info(
            "Simulating %s training on %d records (%d train / %d validation)",
            config.model_type.value, len(records), train_count, validation_count
        )

        for step in range(1, steps + 1):
            if self.config.step_delay_seconds > 0:
                self._sleep(self.config.step_delay_seconds)
            if on_progress is not None:
                on_progress(TrainingProgress.at(step * 100 / steps, total_epochs))

        return ModelMetrics(
            accuracy=0.85 + self.rng.random() * 0.1,
            mse=50 + self.rng.random() * 20,
            mae=15 + self.rng.random() * 10,
            r2_score=0.8 + self.rng.random() * 0.15,
            training_time=120 + self.rng.random() * 60,
        )


class SimulatedPredictor(Predictor):
    """
    Returns a random volume after an optional delay.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.config = config or SimulationConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.clock = clock or datetime.now
        self._sleep = sleep

    def predict(self, request: PredictionRequest) -> PredictionResult:
        if self.config.prediction_delay_seconds > 0:
            self._sleep(self.config.prediction_delay_seconds)

        logger.debug("Simulated prediction for %s at %s %s", request.location, request.date, request.time)

        return PredictionResult(
            predicted=round(50 + self.rng.random() * 100),
            confidence=0.8 + self.rng.random() * 0.15,
            timestamp=self.clock().isoformat(),
        )
