# type: ignore
import regmu.common.codec as codec
import regmu.rasm.masm as masm
import regmu.tools.disasm as disasm

import unit_utils
from fixtures import cli_runner  # noqa: F401


def test_compile_writes_image(cli_runner, tmp_path):
    source = unit_utils.find_file('testdata/store.rasm')
    binary = tmp_path / 'out' / 'store.bin'

    result = cli_runner.invoke(masm.compile, [str(source), str(binary)])

    assert result.exit_code == 0
    assert codec.unpack_program(binary.read_bytes()) == unit_utils.assemble_file('testdata/store.rasm')


def test_compile_rejects_bad_source(cli_runner, tmp_path):
    source = tmp_path / 'bad.rasm'
    source.write_text('hlt\n\n')
    binary = tmp_path / 'bad.bin'

    result = cli_runner.invoke(masm.compile, [str(source), str(binary)])

    assert result.exit_code == masm.EXIT_ASM_ERROR
    assert not binary.exists()


def test_collect_lines():
    lines = masm.collect_lines(str(unit_utils.find_file('testdata/store.rasm')))
    assert lines == ['ldh reg0 0', 'ldl reg0 5', 'st reg0 10', 'hlt']


def test_disassembler_listing(cli_runner, tmp_path):
    image = tmp_path / 'store.bin'
    image.write_bytes(codec.pack_program(unit_utils.assemble_file('testdata/store.rasm')))

    result = cli_runner.invoke(disasm.disassemble, [str(image)])

    assert result.exit_code == 0
    assert '  2: 700A  st reg0 10' in result.output
    assert '  3: 7800  hlt' in result.output
