#!/usr/bin/env python3
"""
Command line front end for the interpreter.

Runs a hex-encoded bytecode sequence and prints the resulting stack, with
optional instruction trace, disassembly and bit-vector cross-check.
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

import structlog
import yaml

from .config import TRUNCATED_PUSH_POLICIES, VMConfig
from .core.errors import InvalidBytecode
from .core.opcodes import disassemble_bytecode, normalize_bytecode
from .core.word import to_signed
from .interpreter import ExecutionResult, run
from .logging_config import configure_logging

logger = structlog.wrap_logger(logging.getLogger(__name__))

OUTPUT_FORMATS = ["json", "yaml", "text"]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

ENV_OUTPUT_FORMAT = "MINIEVM_OUTPUT_FORMAT"
ENV_LOG_LEVEL = "MINIEVM_LOG_LEVEL"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_INPUT = 2
EXIT_INTERRUPTED = 130


def env_choice(name: str, default: str, choices: List[str]) -> str:
    """
    Read a setting from the environment and match it against the allowed choices.

    Raises:
        ValueError: If the variable holds a value outside ``choices``
    """
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    for choice in choices:
        if raw.lower() == choice.lower():
            return choice
    raise ValueError(f"Invalid value for {name}: {raw!r}, expected one of {', '.join(choices)}")


def load_bytecode(bytecode: Optional[str], bytecode_file: Optional[str]) -> bytes:
    """
    Read bytecode from a hex string or from a file holding hex text.

    Raises:
        InvalidBytecode: If the hex cannot be decoded
        OSError: If the file cannot be read
    """
    if bytecode_file:
        with open(bytecode_file, "r") as f:
            bytecode = f.read().strip()
    return normalize_bytecode(bytecode or "")


def build_report(
    code: bytes,
    result: ExecutionResult,
    signed: bool = False,
    disassemble: bool = False,
    cross_check_report=None,
) -> Dict[str, Any]:
    report = result.to_dict()
    if not result.trace:
        report.pop("trace")
    if signed:
        report["signed_stack"] = [to_signed(w) for w in result.stack]
    if disassemble:
        report["disassembly"] = [
            {
                "offset": offset,
                "opcode": name,
                "push_data": "0x" + data.hex() if data is not None else None,
            }
            for name, _value, data, offset in disassemble_bytecode(code)
        ]
    if cross_check_report is not None:
        report["cross_check"] = cross_check_report.to_dict()
    return report


def format_text(report: Dict[str, Any]) -> str:
    lines: List[str] = []
    lines.append(f"Status:  {report['status']} ({'success' if report['success'] else 'failure'})")
    if report.get("error"):
        lines.append(f"Error:   {report['error']}")
    lines.append(f"Steps:   {report['steps']}")
    lines.append("Stack (top last):")
    if not report["stack"]:
        lines.append("  <empty>")
    signed_stack = report.get("signed_stack")
    for i, word in enumerate(report["stack"]):
        suffix = f"  ({signed_stack[i]})" if signed_stack is not None else ""
        lines.append(f"  [{i}] {word}{suffix}")
    if "disassembly" in report:
        lines.append("Disassembly:")
        for entry in report["disassembly"]:
            data = f" {entry['push_data']}" if entry["push_data"] else ""
            lines.append(f"  {entry['offset']:04x}: {entry['opcode']}{data}")
    if "trace" in report:
        lines.append("Trace:")
        for step in report["trace"]:
            lines.append(f"  {step['pc']:04x}: {step['opcode']:<10} -> {step['stack_out']}")
    if "cross_check" in report:
        verdict = "agrees" if report["cross_check"]["agrees"] else "MISMATCH"
        lines.append(f"Cross-check: {verdict}")
    return "\n".join(lines)


def render(report: Dict[str, Any], output_format: str) -> str:
    if output_format == "json":
        return json.dumps(report, indent=2)
    if output_format == "yaml":
        return yaml.safe_dump(report, default_flow_style=False, sort_keys=False)
    return format_text(report)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Execute 256-bit stack machine bytecode",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--bytecode", help="Bytecode as a hex string (0x prefix optional)")
    source.add_argument("--bytecode-file", help="File containing bytecode (hex)")

    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        help=f"Output format (default: ${ENV_OUTPUT_FORMAT} or text)",
    )
    parser.add_argument(
        "--truncated-push",
        choices=TRUNCATED_PUSH_POLICIES,
        help="Handling of PUSH opcodes whose operand runs past the end of the bytecode",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Include a per-instruction trace",
    )
    parser.add_argument("--disassemble", action="store_true", help="Include a disassembly listing")
    parser.add_argument(
        "--cross-check",
        action="store_true",
        help="Replay the bytecode on the z3 bit-vector model and compare",
    )
    parser.add_argument("--signed", action="store_true", help="Also show stack words as signed integers")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        help="Logging level",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, run the bytecode and print the result.

    Returns:
        Exit code (0 for success, 1 for a failed execution or cross-check
        mismatch, 2 for invalid input)
    """
    args = parse_args(argv)

    # Flags win over MINIEVM_* environment defaults
    try:
        env_config = VMConfig.from_env()
        output_format = args.format or env_choice(ENV_OUTPUT_FORMAT, "text", OUTPUT_FORMATS)
        log_level = args.log_level or env_choice(ENV_LOG_LEVEL, "WARNING", LOG_LEVELS)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    configure_logging("DEBUG" if args.verbose else log_level, json_output=args.json_logs)

    try:
        code = load_bytecode(args.bytecode, args.bytecode_file)
        config = VMConfig(
            truncated_push=args.truncated_push or env_config.truncated_push,
            trace=args.trace or env_config.trace,
        )
    except (InvalidBytecode, OSError, ValueError) as e:
        logger.error("Invalid input", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    try:
        logger.info("Executing bytecode", size=len(code))
        result = run(code, config)

        cross_check_report = None
        if args.cross_check:
            from .analysis.bitvec import cross_check

            cross_check_report = cross_check(code, config)

        report = build_report(
            code,
            result,
            signed=args.signed,
            disassemble=args.disassemble,
            cross_check_report=cross_check_report,
        )
        print(render(report, output_format))

        if cross_check_report is not None and not cross_check_report.agrees:
            return EXIT_FAILED
        return EXIT_OK if result.success else EXIT_FAILED

    except KeyboardInterrupt:
        logger.info("Execution interrupted by user")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
