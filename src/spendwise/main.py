"""Main entry point."""
import sys
import json
import argparse
from pathlib import Path

from spendwise.config import Config, ConfigManager, get_settings
from spendwise.client import InsightClient
from spendwise.utils.logger import get_logger
from spendwise.utils.exceptions import ConfigError, InsightRequestError

logger = get_logger()


def load_records(path: Path) -> list:
    """Read records from a JSON file holding a list or an {"expenses": [...]} object."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("expenses", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of expenses")
    return data


def _print_insight_table(insights: list) -> None:
    """Print formatted table of insights."""
    if not insights:
        print("No insights returned.")
        return

    print(f"\nTotal: {len(insights)} insights")
    print(f"{'Type':<12} {'Impact':<8} {'Savings':<12} {'Title'}")
    print("-" * 90)

    for insight in insights:
        print(
            f"{insight['type']:<12} {insight['impact']:<8} "
            f"{insight['savings']:<12} {insight['title']}"
        )
        print(f"{'':<34}{insight['description']}")


def _print_summary(summary: dict) -> None:
    """Print monthly and category totals."""
    print(f"\n{'Month':<10} {'Income':>12} {'Expense':>12}")
    print("-" * 36)
    for row in summary["monthly"]:
        print(f"{row['month']:<10} {row['income']:>12.2f} {row['expense']:>12.2f}")

    print(f"\n{'Category':<24} {'Spent':>12}")
    print("-" * 37)
    for row in summary["categories"]:
        print(f"{row['name']:<24} {row['value']:>12.2f}")


def _print_overview(overview: dict) -> None:
    """Print dashboard totals and recent transactions."""
    print(f"\nTotal expense:    {overview['total_expense']:>12.2f}")
    print(f"Total income:     {overview['total_income']:>12.2f}")
    print(f"Daily spend:      {overview['daily_spend']:>12.2f}")
    print(f"Budget used:      {overview['budget_used']:>11.1f}% of {overview['budget_limit']:.2f}")
    print(f"Remaining budget: {overview['remaining_budget']:>12.2f}")

    print(f"\n{'Date':<12} {'Type':<8} {'Category':<24} {'Amount':>12}")
    print("-" * 59)
    for txn in overview["recent"]:
        print(f"{txn['date']:<12} {txn['type']:<8} {txn['category']:<24} {txn['amount']:>12.2f}")


def _load_and_validate_config() -> Config:
    """Load and validate configuration, exiting when it is unusable."""
    config_manager = ConfigManager()
    try:
        config = config_manager.load_config()
    except ConfigError as e:
        logger.critical(str(e))
        sys.exit(1)

    if not config:
        logger.critical("No configuration found. Run 'spendwise configure --api-key KEY' or set OPENAI_API_KEY.")
        sys.exit(1)

    is_valid, message = config_manager.validate_config(config)
    if not is_valid:
        logger.critical(f"Invalid configuration: {message}")
        sys.exit(1)

    logger.info("Configuration loaded successfully")
    return config


def _service_url(args) -> str:
    if args.url:
        return args.url
    try:
        config = ConfigManager().load_config()
    except ConfigError:
        config = None
    if config and config.service_url:
        return config.service_url
    return get_settings().client_base_url


def serve_command(host: str, port: int) -> None:
    """Run the insight service."""
    import uvicorn
    from spendwise.api import create_app

    config = _load_and_validate_config()
    logger.setLevel(config.log_level.upper())
    app = create_app(config)

    logger.info(f"Insight service starting on {host}:{port}")
    uvicorn.run(app, host=host, port=port)


def insights_command(records_path: Path, url: str) -> None:
    """Request insights for the records in a file and print them."""
    records = load_records(records_path)
    client = InsightClient(url, timeout=get_settings().client_timeout_seconds)

    try:
        insights = client.fetch_insights(records)
    except InsightRequestError as e:
        logger.error(f"Insight request failed: {e}")
        print("Failed to generate insights")
        sys.exit(1)

    _print_insight_table(insights)


def summary_command(records_path: Path, url: str) -> None:
    """Request monthly and category totals for the records in a file."""
    records = load_records(records_path)
    client = InsightClient(url, timeout=get_settings().client_timeout_seconds)

    try:
        summary = client.fetch_summary(records)
    except InsightRequestError as e:
        logger.error(f"Summary request failed: {e}")
        print("Failed to generate summary")
        sys.exit(1)

    _print_summary(summary)


def overview_command(records_path: Path, url: str) -> None:
    """Request the dashboard overview for the records in a file."""
    records = load_records(records_path)
    client = InsightClient(url, timeout=get_settings().client_timeout_seconds)

    try:
        overview = client.fetch_overview(records)
    except InsightRequestError as e:
        logger.error(f"Overview request failed: {e}")
        print("Failed to generate overview")
        sys.exit(1)

    _print_overview(overview)


def configure_command(api_key: str, service_url: str = None, log_level: str = "INFO") -> None:
    """Store user configuration."""
    config_manager = ConfigManager()
    config = Config(openai_api_key=api_key, log_level=log_level, service_url=service_url)

    is_valid, message = config_manager.validate_config(config)
    if not is_valid:
        print(f"✗ {message}")
        sys.exit(1)

    config_manager.save_config(config)
    print(f"✓ Configuration saved to {config_manager.config_file}")


def main():
    """Main entry point for the Spendwise CLI."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Spendwise spending insights")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the insight service")
    serve_parser.add_argument("--host", default=settings.service_host)
    serve_parser.add_argument("--port", type=int, default=settings.service_port)

    for name, help_text in (
        ("insights", "Generate insights for expenses in a JSON file"),
        ("summary", "Show monthly and category totals for expenses in a JSON file"),
        ("overview", "Show totals, budget usage and recent transactions for a JSON file"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("file", type=Path, help="JSON file with expense records")
        sub.add_argument("--url", help="Insight service URL")

    configure_parser = subparsers.add_parser("configure", help="Save API key and service URL")
    configure_parser.add_argument("--api-key", required=True)
    configure_parser.add_argument("--service-url")
    configure_parser.add_argument("--log-level", default="INFO")

    args = parser.parse_args()

    if args.command == "configure":
        configure_command(args.api_key, args.service_url, args.log_level)
        return

    if args.command == "serve":
        serve_command(args.host, args.port)
        return

    try:
        if args.command == "insights":
            insights_command(args.file, _service_url(args))
        elif args.command == "overview":
            overview_command(args.file, _service_url(args))
        else:
            summary_command(args.file, _service_url(args))
    except (OSError, ValueError) as e:
        logger.critical(f"Cannot read expenses: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
