import logging as lg
from typing import Callable, Sequence

import regmu.common.ops as ops
import regmu.common.codec as codec
from regmu.common.hwconf import (
    WORD_MASK, SIGN_BIT, LOW_BYTE, HIGH_BYTE,
    REGISTER_COUNT, PROGRAM_MEMORY_SIZE, DATA_MEMORY_SIZE
)


class Halt(Exception):
    pass


class ExecutionError(Exception):
    pc: int

    def __init__(self, pc: int, message: str):
        super().__init__(f'pc {pc}: {message}')
        self.pc = pc


class InvalidInstruction(ExecutionError):
    pass


class ProgramCounterOutOfBounds(ExecutionError):
    pass


class StepLimitExceeded(ExecutionError):
    pass


class CPU():
    pc: int  # Program counter
    ir: int  # Instruction register
    flag: int  # Result of the last cmp
    gp: list[int]  # General purpose registers
    memory: list[int]  # Data memory
    program: tuple[int, ...]  # Program memory
    steps: int
    halted: bool
    instruction: codec.Instruction  # Decoded ir

    def __init__(self, program: Sequence[int]):
        if len(program) > PROGRAM_MEMORY_SIZE:
            raise ValueError(f'Program of {len(program)} words exceeds {PROGRAM_MEMORY_SIZE}')

        self.program = tuple(program)
        self.memory = [0] * DATA_MEMORY_SIZE

        self.pc = 0
        self.ir = 0
        self.instruction = codec.decode(0)
        self.flag = 0
        self.steps = 0
        self.halted = False

        self.gp = [0] * REGISTER_COUNT

    # - Helpers - #

    def debug_dump(self):
        if not lg.getLogger().isEnabledFor(lg.DEBUG):
            return

        state = [f'{k}:{v:X}' for k, v in {
            'PC': self.pc,
            'IR': self.ir,
            'F': self.flag,
            'N': self.steps
        }.items()]

        state.extend([f'{i}:{self.gp[i]:X}' for i in range(len(self.gp))])

        lg.debug(' '.join(state))

    def r1(self) -> int:
        return self.instruction.reg1

    def r2(self) -> int:
        return self.instruction.reg2

    def imm(self) -> int:
        return self.instruction.imm

    def arithm_pair(self, op: Callable[[int, int], int]):
        r1 = self.r1()
        self.gp[r1] = op(self.gp[r1], self.gp[self.r2()]) & WORD_MASK

    def arithm_single(self, op: Callable[[int], int]):
        r1 = self.r1()
        self.gp[r1] = op(self.gp[r1]) & WORD_MASK

    # - Operations - #
    # A handler returns the new pc when it jumps

    def mov(self):
        self.gp[self.r1()] = self.gp[self.r2()]

    def add(self):
        self.arithm_pair(lambda a, b: a + b)

    def sub(self):
        self.arithm_pair(lambda a, b: a - b)

    def band(self):
        self.arithm_pair(lambda a, b: a & b)

    def bor(self):
        self.arithm_pair(lambda a, b: a | b)

    def sl(self):
        self.arithm_single(lambda a: a << 1)

    def sr(self):
        self.arithm_single(lambda a: a >> 1)

    def sra(self):
        self.arithm_single(lambda a: (a >> 1) | (a & SIGN_BIT))

    def ldl(self):
        self.arithm_single(lambda a: (a & HIGH_BYTE) | self.imm())

    def ldh(self):
        self.arithm_single(lambda a: (a & LOW_BYTE) | (self.imm() << 8))

    def cmp(self):
        self.flag = 1 if self.gp[self.r1()] == self.gp[self.r2()] else 0

    def je(self) -> int | None:
        if self.flag == 1:
            return self.imm()

        return None

    def jmp(self) -> int:
        return self.imm()

    def ld(self):
        self.gp[self.r1()] = self.memory[self.imm()]

    def st(self):
        self.memory[self.imm()] = self.gp[self.r1()]

    def hlt(self):
        self.halted = True
        raise Halt()

    HANDLERS = {
        ops.MOV: mov,
        ops.ADD: add,
        ops.SUB: sub,
        ops.AND: band,
        ops.OR: bor,
        ops.SL: sl,
        ops.SR: sr,
        ops.SRA: sra,
        ops.LDL: ldl,
        ops.LDH: ldh,
        ops.CMP: cmp,
        ops.JE: je,
        ops.JMP: jmp,
        ops.LD: ld,
        ops.ST: st,
        ops.HLT: hlt
    }

    # -- Implementation -- #

    def fetch(self) -> int:
        if not 0 <= self.pc < len(self.program):
            raise ProgramCounterOutOfBounds(
                self.pc, f'outside of the program ({len(self.program)} words)'
            )

        return self.program[self.pc]

    def decode(self, word: int):
        if not isinstance(word, int) or not 0 <= word <= WORD_MASK:
            raise InvalidInstruction(self.pc, f'malformed instruction word {word!r}')

        instruction = codec.decode(word)

        if instruction.op not in self.HANDLERS:
            raise InvalidInstruction(self.pc, f'invalid opcode {instruction.op} in word 0x{word:04X}')

        self.instruction = instruction
        return self.HANDLERS[instruction.op]

    def exec_next(self):
        self.ir = self.fetch()
        handler = self.decode(self.ir)
        self.steps += 1

        target = handler(self)
        self.pc = self.pc + 1 if target is None else target
