from pathlib import Path
import logging as lg

import click

import regmu.common.codec as codec


def listing(program: list[int]) -> list[str]:
    return [
        f'{addr:3}: {word:04X}  {codec.disassemble(word)}'
        for addr, word in enumerate(program)
    ]


@click.command()
@click.argument('binary', type=Path)
def disassemble(binary: Path):
    lg.basicConfig(level=lg.INFO)

    program = codec.unpack_program(binary.read_bytes())
    lg.info(f'{binary}: {len(program)} word(s)')

    for line in listing(program):
        click.echo(line)


if __name__ == '__main__':
    disassemble()
