"""
Alert Graph CLI
===============

Lay out an alert network offline and print the renderable payload.

COMMANDS:
- layout:  Read a {nodes, edges} JSON file and print the projected graph
- fetch:   Fetch an alert network from the data service and print it
- alerts:  List the service's alerts, most severe first

USAGE:
    python -m alertview.cli layout network.json --show-transparent
    python -m alertview.cli fetch 42 --service-url http://127.0.0.1:5000
    python -m alertview.cli alerts
"""
import argparse
import json
import sys
from typing import Any, List, Optional

from alertgraph.config import AlertGraphConfig
from alertgraph.contracts.network import by_severity
from alertgraph.core.layout import GraphModelBuilder, LayoutConfig
from alertgraph.core.visibility import filter_visible
from alertgraph.ingestion.client import AlertServiceClient
from alertgraph.normalization.validator import validate_alert_list, validate_network
from alertgraph.observability import configure_logging

from . import LOGGER_NAMES
from .api.mapper import map_alert_list, map_graph_response
from .visualization.graph import project_graph


def render_network(alert_id: str, raw: Any, layout: LayoutConfig, show_transparent: bool) -> dict:
    payload = validate_network(raw)
    model = GraphModelBuilder(layout).build_from_payload(payload)
    view = project_graph(filter_visible(model, show_transparent))
    return map_graph_response(alert_id, model, payload, view)


def cmd_layout(args: argparse.Namespace, config: AlertGraphConfig) -> int:
    try:
        with open(args.path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        print(f"[!] Cannot read {args.path}: {e}", file=sys.stderr)
        return 1

    body = render_network(args.alert_id or args.path, raw, config.layout, args.show_transparent)
    print(json.dumps(body, indent=args.indent))
    return 0


def cmd_fetch(args: argparse.Namespace, config: AlertGraphConfig) -> int:
    client = AlertServiceClient(args.service_url or config.service_url, timeout=config.timeout_seconds)
    result = client.fetch_network_sync(args.alert_id)
    if not result.success:
        print(f"[!] Fetch failed ({result.status.value}): {result.error_message}", file=sys.stderr)
        return 2

    body = render_network(args.alert_id, result.payload, config.layout, args.show_transparent)
    print(json.dumps(body, indent=args.indent))
    return 0


def cmd_alerts(args: argparse.Namespace, config: AlertGraphConfig) -> int:
    client = AlertServiceClient(args.service_url or config.service_url, timeout=config.timeout_seconds)
    result = client.fetch_alert_list_sync()
    if not result.success:
        print(f"[!] Fetch failed ({result.status.value}): {result.error_message}", file=sys.stderr)
        return 2

    alerts, quarantined = validate_alert_list(result.payload)
    print(json.dumps(map_alert_list(by_severity(alerts), quarantined), indent=args.indent))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Alert graph layout tool")
    parser.add_argument("--log-level", default=None, help="Logging level (default from env)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--show-transparent", action="store_true", help="Include hidden elements")
    common.add_argument("--legacy-offset", action="store_true",
                        help="Use the i*V - n*V/2 layer offset instead of centering")
    common.add_argument("--indent", type=int, default=2)

    layout = subparsers.add_parser("layout", parents=[common], help="Lay out a network JSON file")
    layout.add_argument("path")
    layout.add_argument("--alert-id", default=None)
    layout.set_defaults(func=cmd_layout)

    fetch = subparsers.add_parser("fetch", parents=[common], help="Fetch and lay out an alert")
    fetch.add_argument("alert_id")
    fetch.add_argument("--service-url", default=None)
    fetch.set_defaults(func=cmd_fetch)

    alerts = subparsers.add_parser("alerts", help="List alerts, most severe first")
    alerts.add_argument("--service-url", default=None)
    alerts.add_argument("--indent", type=int, default=2)
    alerts.set_defaults(func=cmd_alerts, legacy_offset=False)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = AlertGraphConfig.from_env()
    for name in LOGGER_NAMES:
        configure_logging(args.log_level or config.log_level, config.log_file, name=name)

    if args.legacy_offset:
        config.layout = LayoutConfig(
            rank_spacing=config.layout.rank_spacing,
            layer_spacing=config.layout.layer_spacing,
            centered=False,
        )
    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
