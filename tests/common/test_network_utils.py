from unittest.mock import MagicMock

from common.network_utils import find_ports_in_use, parse_listening_ports

NETSTAT_OUTPUT = """\
Active Internet connections (only servers)
Proto Recv-Q Send-Q Local Address           Foreign Address         State
tcp        0      0 0.0.0.0:5432            0.0.0.0:*               LISTEN
tcp        0      0 127.0.0.53:53           0.0.0.0:*               LISTEN
tcp6       0      0 :::8443                 :::*                    LISTEN
tcp        0      0 10.0.0.5:22             10.0.0.9:9000           ESTABLISHED
udp        0      0 0.0.0.0:9001            0.0.0.0:*
"""


def test_parse_listening_ports_reads_local_address_only():
    ports = parse_listening_ports(NETSTAT_OUTPUT)

    assert ports == {5432, 53, 8443}


def test_parse_listening_ports_ignores_garbage():
    assert parse_listening_ports("") == set()
    assert parse_listening_ports("tcp 0 0 nonsense") == set()


def test_find_ports_in_use_keeps_input_order(mocker, mock_logger):
    run_mock = mocker.patch(
        "common.network_utils.run_command",
        return_value=MagicMock(stdout=NETSTAT_OUTPUT),
    )

    in_use = find_ports_in_use(
        [8443, 8089, 5432, 9000, 9001], None, mock_logger
    )

    assert in_use == [8443, 5432]
    assert run_mock.call_args.args[0] == ["netstat", "-lnt"]
