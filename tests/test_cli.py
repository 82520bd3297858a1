import logging

import numpy as np
import pytest

from threes_td.agents import NTupleNetwork
from threes_td.config import NUM_TABLES, TABLE_SIZE
from threes_td.main import main
from threes_td.utils.cli import parse_args


def test_parse_args():
    args = parse_args(["--seed", "7", "inspect", "weights.bin"])
    assert args.seed == 7
    assert args.command == "inspect"
    assert args.path == "weights.bin"
    assert args.log_file == "threes_td.log"


def test_command_is_required():
    with pytest.raises(SystemExit):
        parse_args([])


def test_init_writes_zeroed_file(tmp_path):
    path = tmp_path / "weights.bin"
    main(["--log-file", str(tmp_path / "run.log"), "init", str(path)])
    assert path.stat().st_size == 4 + NUM_TABLES * TABLE_SIZE * 4

    network = NTupleNetwork()
    network.load(str(path))
    assert all(not table.any() for table in network.weights)


def test_inspect_reports_tables(tmp_path, caplog):
    network = NTupleNetwork()
    network.initialize()
    network.weights[5][9] = -2.5
    path = tmp_path / "weights.bin"
    network.save(str(path))

    caplog.set_level(logging.INFO)
    main(["--log-file", str(tmp_path / "run.log"), "inspect", str(path)])
    assert "Table 5: non-zero = 1, min = -2.5000" in caplog.text


def test_missing_weight_file_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["--log-file", str(tmp_path / "run.log"), "inspect", str(tmp_path / "missing.bin")])
    assert excinfo.value.code == 1
