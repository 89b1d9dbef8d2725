# ==============================================
# Traffic Dashboard Core
# ==============================================
#
# Package Structure:
#
# traffic_dashboard/
# ├── normalization/    # Raw CSV rows → TrafficRecord
# ├── ingestion/        # CSV text / files → raw rows (pandas)
# ├── analysis/         # Grouped aggregates for every chart
# ├── simulation/       # Pluggable (simulated) trainer / predictor
# ├── sample_data.py    # Synthetic dataset for demos
# ├── exceptions.py     # Error hierarchy
# ├── config.py         # Configuration management
# ├── dashboard.py      # Application state + orchestrator
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
