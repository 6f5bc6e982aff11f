from pathlib import Path
import logging as lg
import sys

import click

from regmu.rasm.asm import assemble, AssemblyError
import regmu.common.codec as codec


EXIT_ASM_ERROR = 1


def collect_lines(filepath: str | Path) -> list[str]:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    return filepath.read_text().splitlines()


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('source', type=Path)
@click.argument('binary', type=Path)
def compile(verbose: bool, source: Path, binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("REGMU ASM")

    try:
        program = assemble(collect_lines(source))
    except AssemblyError as e:
        lg.error(f'Invalid input: {e}')
        sys.exit(EXIT_ASM_ERROR)

    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(codec.pack_program(program))


if __name__ == "__main__":
    compile()
