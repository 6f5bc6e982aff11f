WORD_BITS = 16
WORD_MASK = (1 << WORD_BITS) - 1
SIGN_BIT = 1 << (WORD_BITS - 1)
LOW_BYTE = 0x00FF
HIGH_BYTE = 0xFF00

REGISTER_COUNT = 8
PROGRAM_MEMORY_SIZE = 256       # words addressable by the program counter
DATA_MEMORY_SIZE = 256          # cells reachable by ld/st

IMM_MAX = 0xFF                  # 8-bit data and addresses

DEFAULT_MAX_STEPS = 1_000_000   # runaway guard for programs that never halt

IMAGE_WORD_FORMAT = '>H'        # binary program image: big-endian 16-bit words
IMAGE_WORD_SIZE = 2
