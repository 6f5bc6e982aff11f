# type: ignore
import pytest

import regmu.runtime.cpu as cpu
import regmu.runtime.emulator as emulator
import regmu.common.codec as codec
from regmu.rasm.asm import AssemblyError

import unit_utils
from fixtures import cli_runner, store_image  # noqa: F401


def test_store():
    proc = unit_utils.execute_file('testdata/store.rasm')
    assert proc.memory[10] == 5
    assert proc.pc == 3
    assert proc.halted
    assert codec.opcode(proc.ir) == 0b1111


def test_conditional_jump_skips():
    proc = unit_utils.execute_file('testdata/skip.rasm')
    assert proc.flag == 1
    assert proc.gp[2] == 0
    assert proc.memory[20] == 0


def test_multiply_loop():
    proc = unit_utils.execute_file('testdata/multiply.rasm')
    assert proc.memory[64] == 42
    assert proc.gp[1] == 0


def test_aliases():
    proc = unit_utils.execute_file('testdata/aliases.rasm')
    assert proc.memory[0] == 0xC000
    assert proc.memory[1] == 0x4000
    assert proc.gp[3] == 0xC000
    assert proc.pc == 10


def test_step_limit():
    with pytest.raises(cpu.StepLimitExceeded) as info:
        unit_utils.execute_file('testdata/spin.rasm', max_steps=100)

    assert info.value.pc in (1, 2)


def test_step_limit_counts_halt():
    program = unit_utils.assemble_file('testdata/store.rasm')
    assert emulator.execute(program, max_steps=4).memory[10] == 5

    with pytest.raises(cpu.StepLimitExceeded):
        emulator.execute(program, max_steps=3)


def test_unbounded_run():
    proc = emulator.execute(unit_utils.assemble_file('testdata/multiply.rasm'), max_steps=None)
    assert proc.memory[64] == 42


def test_execute_source():
    proc = emulator.execute_source(['ldl reg0 200', 'st reg0 0', 'hlt'])
    assert proc.memory[0] == 200


def test_execute_source_error():
    with pytest.raises(AssemblyError):
        emulator.execute_source(['ldl reg0 200', 'foo reg0 reg1', 'hlt'])


def test_cli_run_source(cli_runner):
    path = unit_utils.find_file('testdata/store.rasm')
    result = cli_runner.invoke(emulator.run, [str(path), '--dump', '10', '--registers'])
    assert result.exit_code == emulator.EXIT_HALT
    assert 'mem[10] = 5' in result.output
    assert 'reg0 = 5' in result.output


def test_cli_run_binary(cli_runner, store_image):
    result = cli_runner.invoke(emulator.run, ['--binary', str(store_image), '-d', '10'])
    assert result.exit_code == emulator.EXIT_HALT
    assert 'mem[10] = 5' in result.output


def test_cli_assembly_error(cli_runner, tmp_path):
    source = tmp_path / 'bad.rasm'
    source.write_text('ldl reg0 256\nhlt\n')
    result = cli_runner.invoke(emulator.run, [str(source)])
    assert result.exit_code == emulator.EXIT_ASM_ERROR


def test_cli_step_limit(cli_runner):
    path = unit_utils.find_file('testdata/spin.rasm')
    result = cli_runner.invoke(emulator.run, [str(path), '--max-steps', '50'])
    assert result.exit_code == emulator.EXIT_STEP_LIMIT


def test_cli_invalid_instruction(cli_runner, tmp_path):
    image = tmp_path / 'bad.bin'
    image.write_bytes(codec.pack_program([0x8000]))
    result = cli_runner.invoke(emulator.run, ['--binary', str(image)])
    assert result.exit_code == emulator.EXIT_EXEC_ERROR
