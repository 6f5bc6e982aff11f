''' Instruction word layout shared by the assembler and the CPU

    15   14..11   10..8   7..5   4..0
    0    opcode   reg1    reg2   -
    0    opcode   reg1    imm/addr (7..0)
'''

import struct
from dataclasses import dataclass
from typing import Iterable

import regmu.common.ops as ops
from regmu.common.hwconf import IMAGE_WORD_FORMAT, IMAGE_WORD_SIZE, WORD_MASK

OPCODE_SHIFT = 11
REG1_SHIFT = 8
REG2_SHIFT = 5

REG_MASK = 0b111
IMM_MASK = 0xFF


@dataclass(frozen=True)
class Instruction:
    op: int
    reg1: int = 0
    reg2: int = 0
    imm: int = 0


def encode(op: int, reg1: int = 0, reg2: int = 0, imm: int = 0) -> int:
    ''' Ranges are the caller's business: registers 0-7, imm 0-255 '''
    return (op << OPCODE_SHIFT) | (reg1 << REG1_SHIFT) | (reg2 << REG2_SHIFT) | imm


def opcode(word: int) -> int:
    # Not masked: a stray bit 15 yields an opcode outside the table
    return word >> OPCODE_SHIFT


def reg1(word: int) -> int:
    return (word >> REG1_SHIFT) & REG_MASK


def reg2(word: int) -> int:
    return (word >> REG2_SHIFT) & REG_MASK


def imm8(word: int) -> int:
    return word & IMM_MASK


def decode(word: int) -> Instruction:
    return Instruction(opcode(word), reg1(word), reg2(word), imm8(word))


def encode_instruction(instruction: Instruction) -> int:
    layout = ops.LAYOUTS[instruction.op]

    if layout == ops.Layout.REG_REG:
        return encode(instruction.op, reg1=instruction.reg1, reg2=instruction.reg2)

    if layout == ops.Layout.REG:
        return encode(instruction.op, reg1=instruction.reg1)

    if layout == ops.Layout.REG_IMM:
        return encode(instruction.op, reg1=instruction.reg1, imm=instruction.imm)

    if layout == ops.Layout.ADDR:
        return encode(instruction.op, imm=instruction.imm)

    return encode(instruction.op)


# - Program image - #

def pack_program(words: Iterable[int]) -> bytes:
    bytestr = bytearray()

    for word in words:
        bytestr += struct.pack(IMAGE_WORD_FORMAT, word)

    return bytes(bytestr)


def unpack_program(data: bytes) -> list[int]:
    if len(data) % IMAGE_WORD_SIZE != 0:
        raise ValueError(f'Program image length {len(data)} is not a multiple of {IMAGE_WORD_SIZE}')

    return [word for (word,) in struct.iter_unpack(IMAGE_WORD_FORMAT, data)]


# - Listing - #

def disassemble(word: int) -> str:
    if not 0 <= word <= WORD_MASK:
        return f'.word {word}  ; out of range'

    op = opcode(word)

    if op not in ops.TABLE:
        return f'.word 0x{word:04X}'

    name = ops.NAMES[op]
    layout = ops.LAYOUTS[op]
    r1 = ops.REGISTER_NAMES[reg1(word)]
    r2 = ops.REGISTER_NAMES[reg2(word)]

    if layout == ops.Layout.REG_REG:
        return f'{name} {r1} {r2}'

    if layout == ops.Layout.REG:
        return f'{name} {r1}'

    if layout == ops.Layout.REG_IMM:
        return f'{name} {r1} {imm8(word)}'

    if layout == ops.Layout.ADDR:
        return f'{name} {imm8(word)}'

    return name
