# type: ignore
import pytest
from click.testing import CliRunner

import regmu.common.codec as codec

import unit_utils


@pytest.fixture
def cli_runner():
    yield CliRunner()


@pytest.fixture
def store_image(tmp_path):
    image = tmp_path / 'store.bin'
    image.write_bytes(codec.pack_program(unit_utils.assemble_file('testdata/store.rasm')))
    yield image
