"""Tests for reading networks from InputData files."""

import math
from pathlib import Path

import numpy as np
import pytest

from queuing_networks.__main__ import main
from queuing_networks.closedJacksonNetwork import ClosedJacksonNetwork
from queuing_networks.inputData import buildNetwork, readInputFile
from queuing_networks.networkErrors import InvalidModelParameter
from queuing_networks.openJacksonNetwork import OpenJacksonNetwork

DATA = Path(__file__).resolve().parent.parent / 'data'


def test_read_closed_network():
    parameters = readInputFile(DATA / 'InputData_Closed.dat')
    assert parameters['M'] == 3
    assert parameters['N'] == 4
    assert parameters['E'] == 1e-9
    np.testing.assert_allclose(parameters['MU'], [1.0, 2.0, 1.5])
    np.testing.assert_allclose(parameters['Q'], [[0.0, 0.6, 0.4], [1.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
    net = buildNetwork(parameters)
    assert isinstance(net, ClosedJacksonNetwork)
    assert net.nodes[1].servers == 2


def test_read_open_network():
    net = buildNetwork(readInputFile(DATA / 'InputData_Open.dat'))
    assert isinstance(net, OpenJacksonNetwork)
    assert net.nodes[2].servers == np.inf
    assert math.isclose(net.lambdaArray[0], 1.1 / 0.9)


def test_capacities_and_single_line_matrix(tmp_path):
    fileName = tmp_path / 'InputData.dat'
    fileName.write_text('M = 2\nMU = 1 1\nC = 3 0\nL = 0.5 0\nQ = 0 1 0 0\n', encoding='utf-8')
    parameters = readInputFile(fileName)
    assert parameters['C'][0] == 3 and parameters['C'][1] == np.inf
    net = buildNetwork(parameters)
    assert net.node(1).maxCustomers() == 3


@pytest.mark.parametrize("text", [
    'M = 2\nMU = 1\nN = 2\nQ = 0 1\n 1 0\n',
    'M = 2\nMU = 1 1\nQ = 0 1\n 1 0\n',
    'M = 2\nMU = 1 1\nN = 2\nQ = 0 1 1\n',
    'M = 2\nXX = 1\n',
])
def test_incorrect_input_files(tmp_path, text):
    fileName = tmp_path / 'InputData.dat'
    fileName.write_text(text, encoding='utf-8')
    with pytest.raises(InvalidModelParameter):
        readInputFile(fileName)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        readInputFile(tmp_path / 'missing.dat')


def test_main_prints_results(capsys):
    assert main(str(DATA / 'InputData_Closed.dat')) == 0
    output = capsys.readouterr().out
    assert 'lambda =' in output
    assert 'maxCustomers = 4' in output


def test_main_reports_errors(tmp_path, capsys):
    assert main(str(tmp_path / 'missing.dat')) == 1
    assert 'ERROR!' in capsys.readouterr().out
    fileName = tmp_path / 'InputData.dat'
    fileName.write_text('M = 2\nMU = 1 1\nN = 2\nQ = 0 0.9\n 1 0\n', encoding='utf-8')
    assert main(str(fileName)) == 1
    assert 'NonConservativeRouting' in capsys.readouterr().out
