import sys
from pathlib import Path
import logging as lg
import traceback
from typing import Iterable, Sequence, Tuple

import click

from regmu.common.hwconf import DEFAULT_MAX_STEPS, DATA_MEMORY_SIZE
import regmu.common.codec as codec
from regmu.rasm.asm import assemble, AssemblyError
import regmu.runtime.cpu as cpu


EXIT_HALT = 0
EXIT_ASM_ERROR = 1
EXIT_STEP_LIMIT = 2
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


def execute(program: Sequence[int], max_steps: int | None = DEFAULT_MAX_STEPS) -> cpu.CPU:
    ''' Runs the program until it halts and returns the halted machine '''
    proc = cpu.CPU(program)

    try:
        while True:
            if max_steps is not None and proc.steps >= max_steps:
                raise cpu.StepLimitExceeded(proc.pc, f'no halt after {max_steps} steps')

            proc.exec_next()
            proc.debug_dump()

    except cpu.Halt:
        lg.info(f'Execution halted at pc {proc.pc} after {proc.steps} steps')

    return proc


def execute_source(lines: Iterable[str], max_steps: int | None = DEFAULT_MAX_STEPS) -> cpu.CPU:
    return execute(assemble(lines), max_steps)


def load_program(path: Path, binary: bool) -> list[int]:
    if binary:
        return codec.unpack_program(path.read_bytes())

    return assemble(path.read_text().splitlines())


def report(proc: cpu.CPU, dump: Tuple[int, ...], registers: bool):
    for addr in dump:
        click.echo(f'mem[{addr}] = {proc.memory[addr]}')

    if registers:
        for i, value in enumerate(proc.gp):
            click.echo(f'reg{i} = {value}')


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--binary', is_flag=True, help='PROGRAM is an assembled image')
@click.option('--max-steps', type=click.IntRange(min=1), default=DEFAULT_MAX_STEPS, show_default=True)
@click.option('-d', '--dump', type=click.IntRange(0, DATA_MEMORY_SIZE - 1), multiple=True,
              help='Data memory cell to print after halt')
@click.option('-r', '--registers', is_flag=True, help='Print registers after halt')
@click.argument('program', type=Path)
def run(verbose: bool, binary: bool, max_steps: int, dump: Tuple[int, ...], registers: bool, program: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("REGMU")

    try:
        proc = execute(load_program(program, binary), max_steps)
        report(proc, dump, registers)
        sys.exit(EXIT_HALT)

    except AssemblyError as e:
        lg.error(f'Invalid input: {e}')
        sys.exit(EXIT_ASM_ERROR)

    except cpu.StepLimitExceeded as e:
        lg.error(f'Execution stopped: {e}')
        sys.exit(EXIT_STEP_LIMIT)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.error(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
