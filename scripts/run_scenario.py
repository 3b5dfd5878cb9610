#!/usr/bin/env python3
"""Run a registry scenario and export its events and records.

Events are published to the chosen sink while the scenario runs; the final
records (participants, lands, requests, fractions) are exported as batches
afterwards.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from land_registry.config import LandRegistryConfig
from land_registry.events import EventSink
from land_registry.logging import setup_logging
from land_registry.models.registry import FractionPolicy
from land_registry.registry import LandRegistry
from land_registry.scenarios import FractionalSaleScenario, WholeSaleScenario
from land_registry.sinks import ConsoleSink, JsonFileSink, KafkaSink

logger = logging.getLogger(__name__)


def build_sink(name: str, config: LandRegistryConfig, output_dir: Path | None) -> EventSink:
    """Create the sink selected on the command line."""
    if name == "json":
        return JsonFileSink(output_dir or config.output.json_output_dir, pretty=config.output.pretty_json)
    if name == "kafka":
        return KafkaSink(config.kafka)
    return ConsoleSink(pretty=True, max_records=5)


def export_records(registry: LandRegistry, sink: EventSink) -> None:
    """Write the registry's final records as batches."""
    participants = [
        registry.get_participant(identity)
        for identity in registry.seller_list() + registry.buyer_list()
    ]
    lands = registry.all_lands()
    fractions = [
        record
        for land in lands
        if land.is_fractional
        for record in registry.fractions.records(land.land_id)
    ]

    sink.write_batch("participants", participants)
    sink.write_batch("lands", lands)
    sink.write_batch("requests", registry.all_requests())
    sink.write_batch("fractions", fractions)


def print_summary(summary: dict[str, int], elapsed: float) -> None:
    """Print final counts."""
    print(f"\n{'='*60}")
    print("Registry Summary")
    print("=" * 60)
    for name, count in summary.items():
        print(f"  {name}: {count}")
    print(f"  elapsed: {elapsed:.2f}s")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run a land registry scenario and export the results"
    )
    parser.add_argument(
        "scenario",
        choices=["fractional", "whole"],
        help="Scenario to run",
    )
    parser.add_argument(
        "--buyers",
        type=int,
        default=10,
        help="Number of buyers (default: 10)",
    )
    parser.add_argument(
        "--sellers",
        type=int,
        default=3,
        help="Number of sellers for the whole sale scenario (default: 3)",
    )
    parser.add_argument(
        "--fractions",
        type=int,
        default=10,
        help="Fractions of the parcel for the fractional scenario (default: 10)",
    )
    parser.add_argument(
        "--price",
        type=int,
        default=1_000_000,
        help="Total parcel price for the fractional scenario (default: 1000000)",
    )
    parser.add_argument(
        "--policy",
        choices=[p.value.lower() for p in FractionPolicy],
        default=None,
        help="Fraction id policy (default: FRACTION_POLICY env or reserved)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--sink",
        choices=["console", "json", "kafka"],
        default="console",
        help="Where to publish events and records (default: console)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory for the json sink",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL env or INFO)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON",
    )
    args = parser.parse_args()

    config = LandRegistryConfig.from_env()
    setup_logging(args.log_level or config.log_level, "json" if args.json_logs else "standard")

    policy = FractionPolicy(args.policy.upper()) if args.policy else config.registry.fraction_policy
    sink = build_sink(args.sink, config, args.output_dir)

    start = time.perf_counter()
    if args.scenario == "fractional":
        scenario = FractionalSaleScenario(
            num_buyers=args.buyers,
            total_fractions=args.fractions,
            total_price=args.price,
            seed=args.seed,
            policy=policy,
            sink=sink,
        )
    else:
        scenario = WholeSaleScenario(
            num_sellers=args.sellers,
            num_buyers=args.buyers,
            seed=args.seed,
            sink=sink,
        )

    try:
        registry = scenario.generate()
        export_records(registry, sink)
    finally:
        sink.close()

    print_summary(registry.summary(), time.perf_counter() - start)


if __name__ == "__main__":
    main()
