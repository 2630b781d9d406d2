# main.py
"""Command line entry point for the trading analytics & bias engine."""
import argparse
import dataclasses
import json
import logging
import sys
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from src.analytics import TradeAnalysisService
from src.biases.models import MarketContext
from src.config.settings import Settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def load_settings(config_path: Path | None) -> Settings:
    """Load settings from YAML, or defaults when no file is given.

    Raises:
        SystemExit: If the config file is missing or cannot be parsed.
    """
    load_dotenv()

    if config_path is None:
        return Settings.from_dict({})

    if not config_path.exists():
        logger.error(f"{config_path} not found")
        sys.exit(1)

    try:
        settings = Settings.from_yaml(config_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Failed to parse {config_path}: {e}")
        sys.exit(1)

    logger.info(f"✓ Settings loaded from {config_path}")
    return settings


def load_trade_records(path: Path) -> list[dict]:
    """Read a JSON array of trade records (newest first).

    Raises:
        SystemExit: If the file is missing or is not a JSON array.
    """
    if not path.exists():
        logger.error(f"Trades file {path} not found")
        sys.exit(1)

    try:
        records = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse {path}: {e}")
        sys.exit(1)

    if not isinstance(records, list):
        logger.error(f"{path} must contain a JSON array of trades")
        sys.exit(1)

    return records


def to_jsonable(value: Any) -> Any:
    """Convert report objects into JSON-serializable structures."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Analyze a trade history for performance and biases.")
    parser.add_argument("trades", type=Path, help="JSON file with trades, newest first")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file")
    parser.add_argument("--trend", choices=["bullish", "bearish"], default=None, help="Market trend hint")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the full analysis and print the report as JSON."""
    args = build_parser().parse_args(argv)

    settings = load_settings(args.config)
    logging.getLogger().setLevel(settings.runtime.log_level.upper())

    records = load_trade_records(args.trades)
    logger.info(f"Loaded {len(records)} trade records from {args.trades}")

    service = TradeAnalysisService(
        analytics_settings=settings.analytics,
        bias_settings=settings.biases,
        recent_trades_limit=settings.report.recent_trades_limit,
    )
    report = service.analyze(records, market_context=MarketContext(trend=args.trend))

    print(json.dumps(to_jsonable(report), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
