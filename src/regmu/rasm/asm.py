import logging as lg
from typing import Iterable

import pyparsing as pp

import regmu.common.ops as ops
import regmu.common.codec as codec
from regmu.common.hwconf import IMM_MAX, PROGRAM_MEMORY_SIZE
import regmu.rasm.grammar as grammar


class AssemblyError(Exception):
    line: int       # 1-based
    token: str
    message: str

    def __init__(self, line: int, token: str, message: str):
        super().__init__(f'line {line}: {message}, but got "{token}"')
        self.line = line
        self.token = token
        self.message = message


ADDRESS_OPS = {ops.JE, ops.JMP, ops.LD, ops.ST}

OPERAND_COUNTS = {
    ops.Layout.REG_REG: 2,
    ops.Layout.REG: 1,
    ops.Layout.REG_IMM: 2,
    ops.Layout.ADDR: 1,
    ops.Layout.NONE: 0,
}


class LineTranslator:
    ''' Translates one source line into one instruction word '''

    def __init__(self, index: int, mnemonic: str, operands: list[str]):
        self.index = index
        self.mnemonic = mnemonic
        self.operands = operands

    def error(self, token: str, message: str) -> AssemblyError:
        return AssemblyError(self.index, token, message)

    def get_register(self, operand: str) -> int:
        try:
            return grammar.reg_op.parse_string(operand, parse_all=True)[0]
        except pp.ParseException:
            raise self.error(operand, 'you must specify a register as an operand') from None

    def get_data(self, operand: str, kind: str) -> int:
        message = f'you must specify 8 bit {kind} as an operand'

        try:
            value = grammar.us_dec_const.parse_string(operand, parse_all=True)[0]
        except pp.ParseException:
            raise self.error(operand, message) from None

        if value > IMM_MAX:
            raise self.error(operand, message)

        return value

    def check_count(self, op: int):
        expected = OPERAND_COUNTS[ops.LAYOUTS[op]]
        given = len(self.operands)

        if given < expected:
            raise self.error(self.mnemonic, f'{self.mnemonic} takes {expected} operand(s), {given} given')

        if given > expected:
            raise self.error(self.operands[expected], f'{self.mnemonic} takes {expected} operand(s), {given} given')

    def translate(self) -> int:
        if self.mnemonic not in ops.MNEMONICS:
            raise self.error(self.mnemonic, 'invalid instruction')

        op = ops.MNEMONICS[self.mnemonic]
        self.check_count(op)

        layout = ops.LAYOUTS[op]
        kind = 'address' if op in ADDRESS_OPS else 'data'

        if layout == ops.Layout.REG_REG:
            r1 = self.get_register(self.operands[0])
            r2 = self.get_register(self.operands[1])
            return codec.encode(op, reg1=r1, reg2=r2)

        if layout == ops.Layout.REG:
            r1 = self.get_register(self.operands[0])
            return codec.encode(op, reg1=r1)

        if layout == ops.Layout.REG_IMM:
            r1 = self.get_register(self.operands[0])
            imm = self.get_data(self.operands[1], kind)
            return codec.encode(op, reg1=r1, imm=imm)

        if layout == ops.Layout.ADDR:
            addr = self.get_data(self.operands[0], kind)
            return codec.encode(op, imm=addr)

        return codec.encode(op)


def translate_line(index: int, line: str) -> int:
    # Any Unicode whitespace separates fields
    tokens = line.split()

    if not tokens:
        raise AssemblyError(index, '', 'empty line')

    translator = LineTranslator(index, tokens[0], tokens[1:])
    return translator.translate()


def assemble(lines: Iterable[str]) -> list[int]:
    ''' Translates source lines into program words.

    Stops at the first faulty line; nothing is returned in that case.
    '''
    program: list[int] = []

    for index, line in enumerate(lines, start=1):
        word = translate_line(index, line)

        if len(program) == PROGRAM_MEMORY_SIZE:
            raise AssemblyError(index, line.split()[0], f'program exceeds {PROGRAM_MEMORY_SIZE} instructions')

        lg.debug(f'{index:>4}: 0x{word:04X}  {codec.disassemble(word)}')
        program.append(word)

    lg.info(f'Assembled {len(program)} instruction(s)')
    return program
