#!/usr/bin/env python3
"""Generate a demo loan ledger and export it.

Builds a ledger populated by ``DemoPortfolioScenario`` and writes its
customers, loans and payments to the console, to JSON files or to Kafka.
With ``--events`` every ledger event is also published while the portfolio
is being generated.

Defaults come from the environment (see ``LedgerConfig.from_env``); command
line flags override them.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loan_ledger.config import LedgerConfig
from loan_ledger.logging import get_logger, setup_logging
from loan_ledger.reports import portfolio_summary
from loan_ledger.scenarios import DemoPortfolioScenario
from loan_ledger.sinks import ConsoleSink, JsonFileSink, KafkaSink, export_ledger
from loan_ledger.store import Ledger

logger = get_logger(__name__)


def build_sink(name: str, config: LedgerConfig) -> ConsoleSink | JsonFileSink | KafkaSink:
    """Create the sink selected on the command line."""
    if name == "json":
        return JsonFileSink(config.output.json_output_dir, pretty=config.output.pretty_json)
    if name == "kafka":
        return KafkaSink(config.kafka, topic_prefix=config.topic_prefix)
    return ConsoleSink(pretty=True, max_records=5)


def parse_args(config: LedgerConfig) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a demo loan ledger")
    parser.add_argument(
        "--customers",
        type=int,
        default=10,
        help="Number of customers to register (default: 10)",
    )
    parser.add_argument(
        "--loans-per-customer",
        type=int,
        default=1,
        help="Loans created for each customer (default: 1)",
    )
    parser.add_argument(
        "--payoff-rate",
        type=float,
        default=0.2,
        help="Share of loans settled in full (default: 0.2)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: SEED or 42)",
    )
    parser.add_argument(
        "--sink",
        choices=["console", "json", "kafka"],
        default="console",
        help="Where to export the ledger (default: console)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.json_output_dir,
        help="Directory for the json sink (default: OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=config.kafka.bootstrap_servers,
        help="Kafka bootstrap servers",
    )
    parser.add_argument(
        "--events",
        action="store_true",
        help="Publish ledger events to the sink while generating",
    )
    return parser.parse_args()


def main() -> None:
    config = LedgerConfig.from_env()
    args = parse_args(config)
    config.output.json_output_dir = args.output_dir
    config.kafka.bootstrap_servers = args.kafka_bootstrap

    setup_logging(config.log_level, config.log_format)

    sink = build_sink(args.sink, config)
    ledger = Ledger.from_config(config)
    if args.events:
        ledger.subscribe(sink.publish_event)

    scenario = DemoPortfolioScenario(
        num_customers=args.customers,
        loans_per_customer=args.loans_per_customer,
        payoff_rate=args.payoff_rate,
        seed=args.seed,
        ledger=ledger,
    )
    scenario.generate()

    export_ledger(ledger, sink)
    sink.close()

    summary = portfolio_summary(ledger.snapshot())
    logger.info(
        "Portfolio: %d loans, %d borrowers, disbursed=%.2f, outstanding=%.2f, active=%d",
        summary.total_loans,
        summary.total_borrowers,
        summary.total_disbursed,
        summary.total_outstanding,
        summary.active_loans,
    )


if __name__ == "__main__":
    main()
