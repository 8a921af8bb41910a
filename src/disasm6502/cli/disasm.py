"""
disasm6502 - MOS 6502 Disassembler Command-Line Interface
=========================================================

This module implements the command-line interface for the 6502 disassembler.
It loads a binary image (or a packed 32-bit word list), decodes a range of it
and prints an assembly listing.

Usage Examples
--------------
Disassemble a ROM image:
    $ disasm6502 rom.bin

With base address:
    $ disasm6502 rom.bin --address 0xC000

Decode a sub-range of the file:
    $ disasm6502 rom.bin --start 0x100 --end 0x180

Limit number of instructions:
    $ disasm6502 rom.bin --count 20

Packed word list input:
    $ disasm6502 rom.txt --packed

JSON output:
    $ disasm6502 rom.bin --json -o listing.json

Defaults for --address, --no-bytes, --no-end-marker and --packed can also be set
with DISASM6502_* environment variables (see disasm6502.config).
"""

import json
import logging
import sys
from itertools import islice
from pathlib import Path
from typing import Optional

import click

from disasm6502 import __version__
from disasm6502.config import DisassemblerConfig, parse_address
from disasm6502.cpu import END_OF_RANGE
from disasm6502.disassembler import MOS6502Disassembler
from disasm6502.rom import PackedRom
from disasm6502.cli.errors import ExitCode, handle_cli_exception

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def setup_logging(verbose: bool) -> None:
    """Configure logging to stderr based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
        stream=sys.stderr,
        force=True,
    )


def parse_number_option(value: Optional[str], name: str, upper: int) -> Optional[int]:
    """
    Parse a numeric option written as 0x-hex, $-hex or decimal.

    Raises:
        click.BadParameter: If the value is not a number in 0..upper
    """
    if value is None:
        return None
    try:
        number = parse_address(value)
    except ValueError:
        raise click.BadParameter(f"invalid number '{value}'", param_hint=name) from None
    if not 0 <= number <= upper:
        raise click.BadParameter(f"must be 0-{upper} (0x0-0x{upper:X})", param_hint=name)
    return number


def load_input(input_file: Path, packed: bool) -> bytes:
    """Read the input file as raw bytes or as a packed word list."""
    if packed:
        return PackedRom.from_file(input_file).to_bytes()
    return input_file.read_bytes()


def hex_dump(data: bytes, base_address: int) -> list:
    """Format data as commented hex dump lines, 16 bytes per line."""
    lines = ["; Hex dump:", "; " + "-" * 60]
    for i in range(0, len(data), 16):
        addr = (base_address + i) & 0xFFFF
        chunk = data[i:i + 16]
        hex_str = " ".join(f"{b:02X}" for b in chunk)
        ascii_str = "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in chunk)
        lines.append(f"; ${addr:04X}: {hex_str:<48} {ascii_str}")
    lines.append("; " + "-" * 60)
    lines.append("")
    return lines


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-a", "--address",
    type=str,
    default=None,
    help="Display address of the first byte (hex with 0x/$ prefix or decimal). Default: 0",
)
@click.option(
    "-s", "--start",
    type=str,
    default=None,
    help="Offset in the input at which to start decoding. Default: 0",
)
@click.option(
    "-e", "--end",
    type=str,
    default=None,
    help="Offset in the input at which to stop decoding (exclusive). Default: end of input",
)
@click.option(
    "-c", "--count",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum number of instructions to disassemble (default: all)",
)
@click.option(
    "--packed",
    is_flag=True,
    help="Treat the input as a text list of signed 32-bit words instead of raw bytes",
)
@click.option(
    "--hex",
    "show_hex",
    is_flag=True,
    help="Include hex dump before disassembly",
)
@click.option(
    "--no-bytes",
    is_flag=True,
    help="Omit raw bytes from output (show only mnemonic and operand)",
)
@click.option(
    "--no-end-marker",
    is_flag=True,
    help="Omit the .END line after a fully decoded range",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Emit instructions as a JSON list",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="disasm6502")
def main(
    input_file: Path,
    output: Optional[Path],
    address: Optional[str],
    start: Optional[str],
    end: Optional[str],
    count: Optional[int],
    packed: bool,
    show_hex: bool,
    no_bytes: bool,
    no_end_marker: bool,
    as_json: bool,
    verbose: bool,
) -> None:
    """
    Disassemble MOS 6502 machine code.

    INPUT_FILE is the binary file to disassemble, or a text file of signed
    32-bit words when --packed is given.

    Examples:

        # Disassemble a ROM mapped at $C000
        disasm6502 rom.bin --address 0xC000

        # Disassemble the first 20 instructions
        disasm6502 rom.bin --count 20 -o listing.asm

        # Disassemble a packed word list
        disasm6502 rom.txt --packed
    """
    setup_logging(verbose)

    try:
        config = DisassemblerConfig.from_env()

        # Command-line options override the environment
        base_address = parse_number_option(address, "--address", 0xFFFF)
        if base_address is not None:
            config.base_address = base_address
        if packed:
            config.packed = True
        if no_bytes:
            config.show_bytes = False
        if no_end_marker:
            config.end_marker = False

        start_offset = parse_number_option(start, "--start", sys.maxsize) or 0
        end_offset = parse_number_option(end, "--end", sys.maxsize)

        data = load_input(input_file, config.packed)
    except Exception as e:
        handle_cli_exception(e, verbose)

    if len(data) == 0:
        click.echo(f"Error: {input_file} is empty", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    logger.debug(f"Input file: {input_file} ({len(data)} bytes)")
    logger.debug(f"Base address: ${config.base_address:04X}")

    disasm = MOS6502Disassembler(data, start=start_offset, end=end_offset)
    logger.debug(f"Decode range: {disasm.start}-{disasm.end}")

    instructions = list(islice(disasm.instructions(), count))

    # Build output
    if as_json:
        result = json.dumps(
            [instr.to_dict(config.base_address) for instr in instructions],
            indent=2,
        ) + "\n"
    else:
        output_lines = [
            f"; Disassembly of {input_file.name}",
            f"; Size: {len(data)} bytes",
            f"; Base address: ${config.base_address:04X}",
            f"; Range: ${disasm.start:04X}-${disasm.end:04X}",
            "",
        ]

        if show_hex:
            # Dump only the decoded range so addresses line up with the listing
            output_lines.extend(hex_dump(
                data[disasm.start:disasm.end],
                config.base_address + disasm.start,
            ))

        for instr in instructions:
            output_lines.append(instr.format_listing(config.base_address, config.show_bytes))

        # Only a fully decoded range gets the end marker
        if config.end_marker and disasm.exhausted:
            output_lines.append(END_OF_RANGE)

        result = "\n".join(output_lines) + "\n"

    # Write output
    if output:
        try:
            output.write_text(result, encoding="utf-8")
        except OSError as e:
            click.echo(f"Error writing {output}: {e}", err=True)
            sys.exit(ExitCode.INVALID_ARGS)
        logger.debug(f"Output written to: {output}")
    else:
        click.echo(result, nl=False)

    logger.debug(f"Instructions disassembled: {len(instructions)}")


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
