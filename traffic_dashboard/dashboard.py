# ==============================================
# TrafficDashboard: Application State + Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS front ends talk to. It owns the current
#   dataset and passes it, explicitly, to the stateless normalizer
#   and aggregator on every call.
#
# HOW IT CONNECTS THE PACKAGES:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                     TrafficDashboard                     │
#   │                                                          │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ INGESTION + NORMALIZATION                    │        │
#   │  │  CsvIngestor → RecordNormalizer              │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ list[TrafficRecord]                    │
#   │                 ▼                                        │
#   │        [ CURRENT DATASET ]  (replaced on upload)         │
#   │                 │ on every view request                  │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ ANALYSIS                                     │        │
#   │  │  TrafficAggregator → buckets → chart rows    │        │
#   │  └──────────────────────────────────────────────┘        │
#   │                                                          │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ SIMULATION (pluggable)                       │        │
#   │  │  Trainer / Predictor                         │        │
#   │  └──────────────────────────────────────────────┘        │
#   └──────────────────────────────────────────────────────────┘
#
# CLASS: TrafficDashboard
# -----------------------
#   Public Methods:
#   ---------------
#   - upload_csv(text, filename) -> dict     status dict, never raises
#   - load_file(path) -> dict                status dict, never raises
#   - load_sample(count, seed) -> int
#   - get_summary(), get_location_stats(), get_hourly_stats(),
#     get_weekly_stats(), get_monthly_trends(), get_growth_metrics(),
#     get_seasonal_stats(), get_weather_stats(), get_weather_impact(),
#     get_heatmap(), get_time_series(), get_peak_hours(),
#     get_recent_activity(), get_status()
#   - train_model(model_config, on_progress) -> ModelMetrics
#   - predict(request) -> PredictionResult
#   - get_prediction_history() -> list[PredictionResult]
#
# ==============================================

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from traffic_dashboard.config import AppConfig, get_config
from traffic_dashboard.exceptions import TrafficDashboardError, UnsupportedFileError
from traffic_dashboard.ingestion import CsvIngestor
from traffic_dashboard.normalization import RecordNormalizer, TrafficRecord
from traffic_dashboard.analysis import (
    Dimension,
    TrafficAggregator,
    growth_metrics,
    weather_impact,
    congestion_level,
)
from traffic_dashboard.sample_data import generate_sample_data
from traffic_dashboard.simulation import (
    ModelConfig,
    ModelMetrics,
    PredictionRequest,
    PredictionResult,
    Predictor,
    SimulatedPredictor,
    SimulatedTrainer,
    Trainer,
    TrainingProgress,
)


logger = logging.getLogger(__name__)

PREDICTION_HISTORY_LIMIT = 10


class TrafficDashboard:
    """
    Holds the current dataset and serves every dashboard view from it.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        trainer: Optional[Trainer] = None,
        predictor: Optional[Predictor] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the dashboard with an empty dataset.

        Args:
            config: Application configuration. If None, loads from environment.
            trainer: Training collaborator. Defaults to SimulatedTrainer.
            predictor: Prediction collaborator. Defaults to SimulatedPredictor.
            clock: Source of "now" for timestamps without a date and for
                   time-range windows. Defaults to datetime.now.
        """
        self._config = config or get_config()
        self._clock = clock or datetime.now

        self._normalizer = RecordNormalizer(clock=self._clock)
        self._ingestor = CsvIngestor(self._config.ingestion, self._normalizer)
        self._aggregator = TrafficAggregator()

        self._trainer = trainer or SimulatedTrainer(self._config.simulation)
        self._predictor = predictor or SimulatedPredictor(self._config.simulation, clock=self._clock)

        # Internal state
        self._records: List[TrafficRecord] = []
        self._source: Optional[str] = None
        self._loaded_at: Optional[datetime] = None
        self._coercion_failures: Dict[str, int] = {}
        self._last_metrics: Optional[ModelMetrics] = None
        self._predictions: List[PredictionResult] = []

    # ======================================
    # Dataset
    # ======================================
    @property
    def records(self) -> List[TrafficRecord]:
        """A copy of the current dataset, in load order."""
        return list(self._records)

    def upload_csv(self, text: str, filename: str = "upload.csv") -> Dict[str, Any]:
        """
        Parse uploaded CSV text and, on success, replace the dataset.

        Args:
            text: File contents
            filename: Original file name (must end in .csv)

        Returns:
            Dictionary with status, message and record count. On error the
            current dataset is left untouched.
        """
        try:
            if not filename.lower().endswith(CsvIngestor.SUPPORTED_EXTENSION):
                raise UnsupportedFileError(filename)
            records = self._ingestor.parse_text(text)
        except TrafficDashboardError as e:
            return self._upload_error(filename, e)

        self._replace_dataset(records, filename)
        return self._upload_success(filename, len(records))

    def load_file(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read a CSV file from disk and, on success, replace the dataset.

        Returns:
            Same status dictionary as upload_csv()
        """
        path = Path(path)
        try:
            records = self._ingestor.load_file(path)
        except TrafficDashboardError as e:
            return self._upload_error(path.name, e)

        self._replace_dataset(records, str(path))
        return self._upload_success(path.name, len(records))

    def load_sample(self, count: Optional[int] = None, seed: Optional[int] = None) -> int:
        """
        Replace the dataset with generated sample data.

        Returns:
            Number of records loaded
        """
        count = count if count is not None else self._config.dashboard.sample_record_count
        seed = seed if seed is not None else self._config.dashboard.sample_seed
        now = self._clock().replace(minute=0, second=0, microsecond=0)

        records = generate_sample_data(count, now=now, seed=seed, normalizer=self._normalizer)
        self._replace_dataset(records, "sample")
        return len(records)

    def _replace_dataset(self, records: List[TrafficRecord], source: str) -> None:
        self._records = list(records)
        self._source = source
        self._loaded_at = self._clock()
        self._coercion_failures = dict(self._normalizer.coercion_failures)
        logger.info("Dataset replaced: %d records from %s", len(records), source)

    def _upload_success(self, filename: str, count: int) -> Dict[str, Any]:
        return {
            "status": "success",
            "filename": filename,
            "records_loaded": count,
            "message": f"Successfully uploaded {count} records",
            "timestamp": self._clock().isoformat(),
        }

    def _upload_error(self, filename: str, error: Exception) -> Dict[str, Any]:
        logger.warning("Upload of %s failed: %s", filename, error)
        if isinstance(error, UnsupportedFileError):
            message = str(error)
        else:
            message = f"Error parsing CSV file. Please check the format. ({error})"
        return {
            "status": "error",
            "filename": filename,
            "records_loaded": 0,
            "message": message,
            "error_type": type(error).__name__,
            "timestamp": self._clock().isoformat(),
        }

    # ======================================
    # Views
    # ======================================
    def get_summary(self) -> Dict[str, Any]:
        return self._aggregator.summary_stats(self._records)

    def get_location_stats(self) -> List[Dict[str, Any]]:
        """Per-location rows with peak reading and congestion label."""
        buckets = self._aggregator.by_location(self._records)
        rows = self._aggregator.to_rows(buckets, Dimension.LOCATION)
        for row in rows:
            row["status"] = congestion_level(row["avg_occupancy"])
        return rows

    def get_hourly_stats(self) -> List[Dict[str, Any]]:
        buckets = self._aggregator.by_hour(self._records)
        return self._aggregator.to_rows(buckets, Dimension.HOUR)

    def get_weekly_stats(self) -> List[Dict[str, Any]]:
        buckets = self._aggregator.by_day_of_week(self._records)
        return self._aggregator.to_rows(buckets, Dimension.DAY_OF_WEEK)

    def get_monthly_trends(self) -> List[Dict[str, Any]]:
        buckets = self._aggregator.by_month(self._records)
        return self._aggregator.to_rows(buckets, Dimension.MONTH)

    def get_growth_metrics(self) -> Optional[Dict[str, Any]]:
        metrics = growth_metrics(self._aggregator.by_month(self._records))
        return metrics.to_dict() if metrics else None

    def get_seasonal_stats(self) -> List[Dict[str, Any]]:
        buckets = self._aggregator.by_season(self._records)
        return self._aggregator.to_rows(buckets, Dimension.SEASON)

    def get_weather_stats(self) -> List[Dict[str, Any]]:
        buckets = self._aggregator.by_weather(self._records)
        return self._aggregator.to_rows(buckets, Dimension.WEATHER)

    def get_weather_impact(self) -> List[Dict[str, Any]]:
        return weather_impact(self._aggregator.by_weather(self._records))

    def get_dimension(self, dimension: Dimension) -> List[Dict[str, Any]]:
        """Chart rows for any dimension."""
        buckets = self._aggregator.aggregate(self._records, dimension)
        return self._aggregator.to_rows(buckets, dimension)

    def get_heatmap(self) -> List[List[int]]:
        return self._aggregator.heatmap(self._records)

    def get_time_series(self, time_range: str = "24h") -> List[Dict[str, Any]]:
        return self._aggregator.time_series(self._records, time_range, now=self._clock())

    def get_peak_hours(self) -> List[Dict[str, Any]]:
        buckets = self._aggregator.by_hour(self._records)
        peaks = self._aggregator.peak_hours(buckets, self._config.dashboard.peak_hours_count)
        return self._aggregator.to_rows({b.key: b for b in peaks}, Dimension.HOUR)

    def get_recent_activity(self) -> List[TrafficRecord]:
        return self._aggregator.recent_activity(
            self._records,
            self._config.dashboard.recent_activity_limit
        )

    def get_status(self) -> Dict[str, Any]:
        """
        Get current dashboard state.

        Returns:
            Dictionary with dataset and simulation information.
        """
        return {
            "records_loaded": len(self._records),
            "source": self._source,
            "loaded_at": self._loaded_at.isoformat() if self._loaded_at else None,
            "coercion_failures": dict(self._coercion_failures),
            "model_trained": self._last_metrics is not None,
            "predictions_made": len(self._predictions),
        }

    # ======================================
    # Simulation
    # ======================================
    def train_model(
        self,
        model_config: Optional[ModelConfig] = None,
        on_progress: Optional[Callable[[TrainingProgress], None]] = None
    ) -> ModelMetrics:
        """
        Run the training collaborator against the current dataset.

        Returns:
            Metrics reported by the trainer
        """
        model_config = model_config or ModelConfig()
        self._last_metrics = self._trainer.train(model_config, self.records, on_progress)
        return self._last_metrics

    def predict(self, request: PredictionRequest) -> PredictionResult:
        """
        Ask the prediction collaborator and record the answer in history.
        """
        result = self._predictor.predict(request)
        self._predictions = [result] + self._predictions[:PREDICTION_HISTORY_LIMIT - 1]
        return result

    def get_prediction_history(self) -> List[PredictionResult]:
        """Most recent predictions first."""
        return list(self._predictions)
