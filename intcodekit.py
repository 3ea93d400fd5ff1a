#!/usr/bin/env python3
"""
intcodekit — Intcode VM Toolkit
===============================

One CLI for everything:
    intcodekit run     — Run a program with pre-supplied inputs
    intcodekit disasm  — Disassemble a program image
    intcodekit search  — Find the noun/verb pair producing a target value
    intcodekit diag    — Run a diagnostic program for a system ID

Usage:
    python intcodekit.py <command> [options]
    python intcodekit.py --help
    python intcodekit.py <command> --help

Examples:
    python intcodekit.py run day5.txt -i 1
    python intcodekit.py run day2.txt --noun 12 --verb 2 --dump
    python intcodekit.py run loop.txt --profile quick
    python intcodekit.py disasm day5.txt --count 20
    python intcodekit.py search day2.txt --target 19690720
    python intcodekit.py diag day5.txt --system-id 5
"""

import argparse
import logging
import os
import sys

# Allow running from project root without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from intcode_vm import __version__, config
from intcode_vm.emu import Engine, StopReason
from intcode_vm.faults import IntcodeError
from intcode_vm.loader import read_program_file
from intcode_vm.mem.memory import Memory

logger = logging.getLogger("intcodekit")


def _non_negative(text):
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {value}")
    return value


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="intcodekit",
        description="Intcode VM Toolkit — run, disassemble, search, diagnose",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""commands:
  run        Run a program and print its output
  disasm     Disassemble a program image
  search     Find noun/verb producing a target at address 0
  diag       Run a diagnostic program and print its code
""",
    )
    parser.add_argument("--version", action="version", version=f"intcodekit {__version__}")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase verbosity (-v: debug, -vv: instruction trace)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Suppress all output except errors")
    parser.add_argument("--log-file", type=str, help="Write log to file")
    sub = parser.add_subparsers(dest="command", metavar="command")

    # ── run ──────────────────────────────────────────────────────────────
    p_run = sub.add_parser("run", help="Run a program and print its output")
    p_run.add_argument("program", help="Program file (comma-separated integers)")
    p_run.add_argument("-i", "--input", type=int, action="append", default=[],
                       help="Input value (repeat for several, consumed in order)")
    p_run.add_argument("--noun", type=int, default=None, help="Patch address 1 before running")
    p_run.add_argument("--verb", type=int, default=None, help="Patch address 2 before running")
    p_run.add_argument("--max-steps", type=int, default=None,
                       help="Watchdog: stop after N instructions")
    p_run.add_argument("--profile", choices=list(config.RUN_PROFILES.keys()), default=None,
                       help="Named watchdog preset (overridden by --max-steps)")
    p_run.add_argument("--dump", action="store_true", help="Print final memory")
    p_run.add_argument("--changes", action="store_true",
                       help="Print memory cells changed by the run")

    # ── disasm ───────────────────────────────────────────────────────────
    p_dis = sub.add_parser("disasm", help="Disassemble a program image")
    p_dis.add_argument("program", help="Program file")
    p_dis.add_argument("--start", type=_non_negative, default=0, help="Start address")
    p_dis.add_argument("--count", type=_non_negative, default=0,
                       help="Maximum instructions (0 = to end)")
    p_dis.add_argument("--describe", action="store_true", help="Append opcode descriptions")
    p_dis.add_argument("-o", "--output", help="Output file (default: stdout)")

    # ── search ───────────────────────────────────────────────────────────
    p_srch = sub.add_parser("search", help="Find noun/verb producing a target value")
    p_srch.add_argument("program", help="Program file")
    p_srch.add_argument("--target", type=int, default=config.GRAVITY_ASSIST_TARGET,
                        help=f"Value wanted at address 0 (default: {config.GRAVITY_ASSIST_TARGET})")

    # ── diag ─────────────────────────────────────────────────────────────
    p_diag = sub.add_parser("diag", help="Run a diagnostic program")
    p_diag.add_argument("program", help="Program file")
    p_diag.add_argument("--system-id", type=int, default=config.DIAG_SYSTEM_ID,
                        help=f"System ID fed as the only input (default: {config.DIAG_SYSTEM_ID})")

    # ── Parse and dispatch ───────────────────────────────────────────────
    args = parser.parse_args(argv)
    config.setup_logging(args.verbose, args.quiet, args.log_file)

    if not args.command:
        parser.print_help()
        return 0

    handler = COMMANDS[args.command]
    try:
        return handler(args)
    except IntcodeError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1


# ═════════════════════════════════════════════════════════════════════════════
# COMMAND IMPLEMENTATIONS
# ═════════════════════════════════════════════════════════════════════════════

# ── run ──────────────────────────────────────────────────────────────────
def cmd_run(args):
    memory = Memory(read_program_file(args.program))
    patches = {}
    if args.noun is not None:
        patches[config.NOUN_ADDR] = args.noun
    if args.verb is not None:
        patches[config.VERB_ADDR] = args.verb
    if patches:
        memory.patch(patches)

    max_steps = args.max_steps
    if max_steps is None:
        if args.profile:
            max_steps = config.RUN_PROFILES[args.profile]["max_steps"]
        else:
            max_steps = config.DEFAULT_MAX_STEPS

    before = memory.snapshot()
    engine = Engine(memory, args.input, trace=args.verbose >= 2)
    reason = engine.run(max_steps=max_steps)

    for value in engine.output:
        print(value)

    if args.changes:
        for addr, (old, new) in sorted(memory.diff(before).items()):
            print(f"[{addr}] {old} -> {new}")
    if args.dump:
        print(memory.dump(width=config.DUMP_WIDTH))

    if reason is StopReason.FAULT:
        logger.error(f"{type(engine.fault).__name__}: {engine.fault}")
        return 1
    if reason is StopReason.TIMEOUT:
        logger.error(f"Watchdog: no HALT within {max_steps} steps (pc={engine.pc})")
        return 2
    logger.info(f"Halted after {engine.steps} steps")
    return 0


# ── disasm ───────────────────────────────────────────────────────────────
def cmd_disasm(args):
    from intcode_vm.disassembler import IntcodeDisassembler

    program = read_program_file(args.program)
    dis = IntcodeDisassembler()
    output = dis.format_listing(program, start=args.start,
                                max_instructions=args.count,
                                show_description=args.describe)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        logger.info(f"Disassembled {len(program)} words -> {args.output}")
    else:
        print(output)
    return 0


# ── search ───────────────────────────────────────────────────────────────
def cmd_search(args):
    from intcode_vm.search import answer, find_noun_verb

    program = read_program_file(args.program)
    found = find_noun_verb(program, target=args.target)
    if found is None:
        logger.error(f"No noun/verb pair produces {args.target}")
        return 1
    noun, verb = found
    print(f"noun={noun} verb={verb} answer={answer(noun, verb)}")
    return 0


# ── diag ─────────────────────────────────────────────────────────────────
def cmd_diag(args):
    from intcode_vm.search import run_diagnostic

    program = read_program_file(args.program)
    print(run_diagnostic(program, system_id=args.system_id))
    return 0


# ═════════════════════════════════════════════════════════════════════════════
# COMMAND DISPATCH TABLE
# ═════════════════════════════════════════════════════════════════════════════

COMMANDS = {
    "run": cmd_run,
    "disasm": cmd_disasm,
    "search": cmd_search,
    "diag": cmd_diag,
}


if __name__ == "__main__":
    sys.exit(main())
