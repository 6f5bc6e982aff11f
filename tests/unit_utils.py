from pathlib import Path

import regmu.rasm.asm as asm
import regmu.runtime.emulator as emulator


def find_file(filename: str) -> Path:
    return Path(__file__).parent / filename


def load_file(filename: str) -> str:
    return find_file(filename).read_text()


def load_lines(filename: str) -> list[str]:
    return load_file(filename).splitlines()


def assemble_file(filename: str) -> list[int]:
    return asm.assemble(load_lines(filename))


def execute_file(filename: str, **kwargs):
    return emulator.execute(assemble_file(filename), **kwargs)
