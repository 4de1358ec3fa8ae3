#!/usr/bin/env python3
"""Generate a sample identification portfolio and write its rule statuses.

Each exchange and parked file gets a set of identified replacement
properties; the resulting rule statuses, indicator panels and the raw
identifications are written to the selected sink.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from exchange_rules.config import ExchangeRulesConfig
from exchange_rules.logging import setup_logging
from exchange_rules.presentation import build_indicator
from exchange_rules.scenarios import IdentificationPortfolioScenario, PortfolioResult
from exchange_rules.sinks import ConsoleSink, JsonFileSink, KafkaSink
from exchange_rules.sinks.serialization import status_to_dict

logger = logging.getLogger(__name__)


def build_status_records(result: PortfolioResult) -> list[dict[str, Any]]:
    """Flatten statuses with their target keys for output."""
    records = []
    for target, status in result.statuses.items():
        record = {"target_kind": target.kind.value, "target_id": target.target_id}
        record.update(status_to_dict(status))
        records.append(record)
    return records


def create_sink(args: argparse.Namespace, config: ExchangeRulesConfig) -> Any:
    """Instantiate the sink selected on the command line."""
    if args.sink == "json":
        return JsonFileSink(args.output_dir or config.output.json_output_dir, pretty=True)
    if args.sink == "kafka":
        config.kafka.bootstrap_servers = args.kafka_bootstrap or config.kafka.bootstrap_servers
        return KafkaSink(config.kafka)
    return ConsoleSink(pretty=True, max_records=args.max_records)


def main() -> None:
    """Main entry point."""
    config = ExchangeRulesConfig.from_env()

    parser = argparse.ArgumentParser(
        description="Generate sample 1031 identification data and rule statuses"
    )
    parser.add_argument(
        "--exchanges",
        type=int,
        default=10,
        help="Number of forward exchanges to generate (default: 10)",
    )
    parser.add_argument(
        "--parked-files",
        type=int,
        default=3,
        help="Number of EAT parked files to generate (default: 3)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--sink",
        choices=["console", "json", "kafka"],
        default="console",
        help="Where to write the output (default: console)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the json sink (default: $OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=None,
        help="Kafka bootstrap servers (default: $KAFKA_BOOTSTRAP_SERVERS)",
    )
    parser.add_argument(
        "--max-records",
        type=int,
        default=None,
        help="Limit records printed per batch by the console sink",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: INFO)",
    )
    args = parser.parse_args()

    setup_logging(args.log_level, config.log_format)

    scenario = IdentificationPortfolioScenario(
        num_exchanges=args.exchanges,
        num_parked_files=args.parked_files,
        seed=args.seed,
        config=config.rules,
    )
    result = scenario.generate()

    sink = create_sink(args, config)
    properties = list(result.store.identified_properties.values())
    indicators = [build_indicator(status, config=config.rules) for status in result.statuses.values()]

    if args.sink == "kafka":
        sink.write_batch(config.kafka.topic, build_status_records(result))
    else:
        sink.write_batch("identified_properties", properties)
        sink.write_batch("rule_statuses", build_status_records(result))
        sink.write_batch("indicators", indicators)
    sink.close()

    logger.info("Store summary: %s", result.store.summary())
    logger.info("Targets with violations: %d", len(result.non_compliant()))


if __name__ == "__main__":
    main()
