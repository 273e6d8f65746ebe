"""
SAP-1 Emulator — Machine / Host Configuration
==============================================

Constants for the SAP-1 machine and the default host settings.
Runtime overrides come in through the CLI (sap1vm.py) or the
SAP1Emulator constructor, never by editing these at import time.
"""

import logging
from pathlib import Path


# =============================================================================
#  MACHINE GEOMETRY (fixed by the 4-bit address bus)
# =============================================================================
PROG_SIZE = 16            # 16 addressable RAM cells, 0x0–0xF

WORD_MASK = 0xFF          # A, B, OUT, RAM cells
NIBBLE_MASK = 0x0F        # MAR, PC, opcode, operand
BUS_MASK = 0x1FF          # 9-bit internal bus (bit 8 = carry out)
FLAG_MASK = 0x01          # CF, ZF


# =============================================================================
#  CLOCK / PACING
# =============================================================================
# One wait per micro-step. 200 ms ≈ 5 Hz clock pulse.
DEFAULT_CLOCK_MS = 200

# Host loop default: 333 ms ≈ 3 Hz, the slowest setting of the breadboard
# machine. Its fastest is ~503 Hz, roughly a 2 ms delay.
HOST_CLOCK_MS = 333


# =============================================================================
#  LOGGING
# =============================================================================
LOG_NAME = "sap1_emulator"
LOG_DIR = Path.cwd() / "logs"
DEFAULT_LOG_LEVEL = logging.DEBUG
DEFAULT_CONSOLE_LEVEL = logging.WARNING
