from enum import Enum


class Layout(Enum):
    ''' Operand field layout of an instruction '''
    REG_REG = 'reg-reg'     # reg1:3 reg2:3 unused:5
    REG = 'reg'             # reg1:3 unused:8
    REG_IMM = 'reg-imm'     # reg1:3 imm:8
    ADDR = 'addr'           # unused:3 addr:8
    NONE = 'none'


MOV = 0b0000   # R2 -> R1
ADD = 0b0001   # R1 + R2 -> R1
SUB = 0b0010   # R1 - R2 -> R1
AND = 0b0011   # R1 & R2 -> R1
OR = 0b0100    # R1 | R2 -> R1
SL = 0b0101    # R1 << 1 -> R1
SR = 0b0110    # R1 >> 1 -> R1
SRA = 0b0111   # R1 >> 1 -> R1, bit 15 kept
LDL = 0b1000   # (R1 & 0xFF00) | U1 -> R1
LDH = 0b1001   # (R1 & 0x00FF) | U1 << 8 -> R1
CMP = 0b1010   # R1 == R2 -> flag
JE = 0b1011    # if flag jmp A1
JMP = 0b1100   # goto A1
LD = 0b1101    # M[A1] -> R1
ST = 0b1110    # R1 -> M[A1]
HLT = 0b1111

# Opcode -> (canonical mnemonic, long alias, layout)
TABLE = {
    MOV: ('mov', 'move', Layout.REG_REG),
    ADD: ('add', 'add', Layout.REG_REG),
    SUB: ('sub', 'sub', Layout.REG_REG),
    AND: ('and', 'and', Layout.REG_REG),
    OR: ('or', 'or', Layout.REG_REG),
    SL: ('sl', 'shift-left', Layout.REG),
    SR: ('sr', 'shift-right', Layout.REG),
    SRA: ('sra', 'shift-right-arith', Layout.REG),
    LDL: ('ldl', 'load-low', Layout.REG_IMM),
    LDH: ('ldh', 'load-high', Layout.REG_IMM),
    CMP: ('cmp', 'compare', Layout.REG_REG),
    JE: ('je', 'jump-if-equal', Layout.ADDR),
    JMP: ('jmp', 'jump', Layout.ADDR),
    LD: ('ld', 'load', Layout.REG_IMM),
    ST: ('st', 'store', Layout.REG_IMM),
    HLT: ('hlt', 'halt', Layout.NONE),
}

NAMES = {op: name for op, (name, _, _) in TABLE.items()}
LAYOUTS = {op: layout for op, (_, _, layout) in TABLE.items()}

MNEMONICS = {name: op for op, (name, _, _) in TABLE.items()}
MNEMONICS.update({alias: op for op, (_, alias, _) in TABLE.items()})

REGISTER_NAMES = [f'reg{i}' for i in range(8)]
