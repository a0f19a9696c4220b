"""Command-line interface for inspecting saved teams and type matchups."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict

from poke_teams.analysis import calculate_weaknesses
from poke_teams.config import Settings

BUCKET_LABELS = (
    ("super_effective", "4x weak"),
    ("effective", "2x weak"),
    ("resistant", "Resists"),
    ("super_resistant", "4x resists"),
    ("immune", "Immune"),
)


def _debug_print(enabled: bool, message: str) -> None:
    if enabled:
        sys.stderr.write(f"[debug] {message}\n")


def _emit_json(payload: object) -> None:
    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")


def _humanize_analysis(name: str, report: dict[str, object]) -> str:
    lines: list[str] = [f"{name}: balance {report['balance_score']}/10", ""]

    weaknesses = report.get("team_weaknesses", []) or []
    if weaknesses:
        lines.append("Shared weaknesses:")
        for weakness in weaknesses:
            lines.append(
                f"  - {weakness['type']}: {weakness['count']} member(s), severity {weakness['severity']}"
            )
        lines.append("")

    strengths = report.get("team_strengths", []) or []
    if strengths:
        lines.append("Strong against: " + ", ".join(strengths))
        lines.append("")

    missing = report.get("missing_roles", []) or []
    if missing:
        lines.append("Missing roles: " + ", ".join(missing))
        lines.append("")

    recs = report.get("recommendations", []) or []
    if recs:
        lines.append("Recommendations:")
        for rec in recs:
            lines.append(f"  - {rec}")
        lines.append("")

    members = report.get("member_analyses", []) or []
    if members:
        lines.append("Members:")
        for member in members:
            roles = ", ".join(r["role"] for r in member.get("roles", [])) or "No clear role"
            moves = ", ".join(member.get("recommended_move_types", [])) or "none"
            lines.append(f"  - {member['name']}: {roles}; coverage move types: {moves}")

    return "\n".join(lines).strip()


def _cmd_teams(args: argparse.Namespace, settings: Settings) -> int:
    service = settings.make_team_service(debug_logger=lambda msg: _debug_print(args.debug, msg))
    teams = service.list_teams()
    if args.json:
        _emit_json([team.summary() for team in teams])
        return 0
    if not teams:
        print("No saved teams.")
        return 0
    for team in teams:
        if team.is_corrupt:
            print(f"{team.id or '?'}  {team.name or '(unnamed)'}  [corrupt: {team.corruption_reason}]")
        else:
            print(f"{team.id}  {team.name}  ({len(team.members)}/6, {team.game_mode})")
    return 0


def _cmd_analyze(args: argparse.Namespace, settings: Settings) -> int:
    service = settings.make_team_service(debug_logger=lambda msg: _debug_print(args.debug, msg))
    analysis = service.analyze_team(args.team_id)
    _debug_print(args.debug, f"Analysis finished for team {args.team_id}")
    payload = asdict(analysis)
    if args.json:
        _emit_json(payload)
    else:
        team = service.get_team(args.team_id)
        print(_humanize_analysis(team.name if team else args.team_id, payload))
    return 0


def _cmd_weaknesses(args: argparse.Namespace, settings: Settings) -> int:
    buckets = calculate_weaknesses(args.types)
    payload = asdict(buckets)
    if args.json:
        _emit_json({"types": args.types, **payload})
        return 0
    print("/".join(args.types))
    for key, label in BUCKET_LABELS:
        if payload[key]:
            print(f"  {label}: {', '.join(payload[key])}")
    return 0


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    from poke_teams.web_server import run

    run(host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build and analyze Pokémon teams")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit results as JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print debug progress information to stderr",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("teams", help="List saved teams")

    analyze = commands.add_parser("analyze", help="Analyze a saved team")
    analyze.add_argument("team_id", help="Id of the team to analyze")

    weaknesses = commands.add_parser("weaknesses", help="Show the defensive profile of a type combination")
    weaknesses.add_argument("types", nargs="+", help="One or two type names (e.g. fire flying)")

    serve = commands.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    _debug_print(args.debug, f"Arguments parsed: {args}")

    handlers = {
        "teams": _cmd_teams,
        "analyze": _cmd_analyze,
        "weaknesses": _cmd_weaknesses,
        "serve": _cmd_serve,
    }
    try:
        settings = Settings.from_env()
        _debug_print(args.debug, f"Using team store at {settings.store_path}")
        return handlers[args.command](args, settings)
    except ValueError as exc:
        # bad settings, unknown types and rejected team operations
        sys.stderr.write(f"error: {exc}\n")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
