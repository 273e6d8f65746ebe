#!/usr/bin/env python3
"""
sap1vm — SAP-1 Virtual Machine host

Usage:
    python sap1vm.py [--program "1F 2E 4F E0 86 60 F0"] [--clock MS]
                     [--max-steps N] [--trace] [--dump] [--log-dir [DIR]] [--verbose]

Runs a 16-byte program (the built-in sample if --program is not given),
printing the output register in hex before every instruction cycle.

Exit codes:
    0  program halted (HLT)
    1  reserved opcode decoded
    2  step budget exhausted, or bad arguments

Examples:
    python sap1vm.py                              # sample program, ~3 Hz
    python sap1vm.py --clock 0 --dump             # full speed, show final state
    python sap1vm.py --program "51 E0 F0" --clock 0
"""

import argparse
import logging
import re
import sys

from rich.console import Console
from rich.table import Table

from sap1_emulator import __version__, SAP1Emulator, Status, NullClock, Clock
from sap1_emulator.config import HOST_CLOCK_MS, LOG_NAME, LOG_DIR
from sap1_emulator.cpu.decoder import disassemble_program
from sap1_emulator.log_setup import setup_logging


def parse_program(text: str) -> bytes:
    """Parse hex bytes separated by whitespace or commas ('1F 2E, 0x3F')."""
    data = []
    for tok in re.split(r'[\s,]+', text.strip()):
        if not tok:
            continue
        if tok.startswith(("0x", "0X")):
            tok = tok[2:]
        elif tok.startswith("$"):
            tok = tok[1:]
        value = int(tok, 16)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Byte out of range: {tok}")
        data.append(value)
    return bytes(data)


def _dump(console: Console, emu: SAP1Emulator):
    table = Table(title="SAP-1 registers")
    for name in ("PC", "MAR", "IR", "A", "B", "OUT", "BUS", "CF", "ZF"):
        table.add_column(name, justify="right")
    r = emu.regs
    table.add_row(f"{r.PC:X}", f"{r.MAR:X}", f"{r.IR:02X}", f"{r.A:02X}",
                  f"{r.B:02X}", f"{r.OUT:02X}", f"{r.BUS:03X}", str(r.CF), str(r.ZF))
    console.print(table)
    console.print(emu.mem.hexdump(), markup=False, highlight=False)
    console.print(disassemble_program(emu.save_program()), markup=False, highlight=False)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="sap1vm",
        description="SAP-1 8-bit teaching computer emulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--program", "-p", default=None,
                        help="Program bytes in hex (default: built-in sample)")
    parser.add_argument("--clock", type=int, default=HOST_CLOCK_MS,
                        help=f"Milliseconds per micro-step (default: {HOST_CLOCK_MS}, 0 = no pacing)")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="Stop after N instruction cycles")
    parser.add_argument("--trace", action="store_true",
                        help="Print an instruction trace when the run ends")
    parser.add_argument("--dump", action="store_true",
                        help="Print registers and RAM when the run ends")
    parser.add_argument("--log-dir", nargs="?", const=str(LOG_DIR), default=None,
                        help=f"Also write a DEBUG log file (default dir: {LOG_DIR})")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase log verbosity (-v, -vv)")
    parser.add_argument("--version", action="version",
                        version=f"sap1vm {__version__}")

    args = parser.parse_args(argv)

    console_level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    log = setup_logging(LOG_NAME, console_level=console_level, log_dir=args.log_dir)

    if args.clock < 0:
        print(f"Error: --clock must be >= 0, got {args.clock}", file=sys.stderr)
        return 2

    try:
        program = parse_program(args.program) if args.program is not None else None
    except ValueError as e:
        print(f"Error: bad --program: {e}", file=sys.stderr)
        return 2

    emu = SAP1Emulator(clock=Clock(args.clock) if args.clock else NullClock())
    if program is None:
        emu.load_sample()
    else:
        if len(program) > 16:
            log.warning("Program is %d bytes; only the first 16 are loaded", len(program))
        emu.load_program(program)
    emu.enable_trace(args.trace)

    status = Status.CONTINUE
    steps = 0
    while status == Status.CONTINUE:
        if args.max_steps is not None and steps >= args.max_steps:
            break
        print(f"{emu.regs.OUT:X}", flush=True)
        status = emu.step()
        steps += 1

    console = Console()
    if args.trace:
        console.print(emu.get_trace(), markup=False, highlight=False)
    if args.dump:
        _dump(console, emu)

    if status == Status.HALTED:
        return 0
    if status == Status.INVALID_OPCODE:
        print(f"Error: invalid opcode at ${(emu.regs.PC - 1) & 0xF:X}", file=sys.stderr)
        return 1
    print(f"Stopped after {steps} cycles without HLT", file=sys.stderr)
    return 2


if __name__ == "__main__":
    sys.exit(main())
