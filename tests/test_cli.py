"""
Brief: Unit tests for dns_annotations.cli covering argument parsing, annotation loading, output lines and exit codes.

Inputs:
  - tmp_path: pytest temporary directory for YAML files
  - capsys: pytest stdout/stderr capture

Outputs:
  - None
"""

import pytest

from dns_annotations.cli import load_annotations, main, parse_args


def _write(tmp_path, name: str, text: str) -> str:
    path = tmp_path / name
    path.write_text(text)
    return str(path)


def test_parse_args_defaults() -> None:
    """Brief: parse_args fills defaults for optional flags.

    Inputs:
      - None.

    Outputs:
      - None; asserts default values.
    """
    args = parse_args(["--annotations", "a.yaml", "--hostname", "x.example.org"])
    assert args.target == []
    assert args.srv is False
    assert args.service == "default"
    assert args.log_level == "WARNING"


def test_load_annotations_keeps_text_verbatim(tmp_path) -> None:
    """Brief: Annotation scalars are read as written, without YAML type resolution.

    Inputs:
      - tmp_path: temporary directory.

    Outputs:
      - None; asserts the raw strings survive loading.
    """
    path = _write(tmp_path, "ann.yaml", "ttl: 60\nprio: 0x10\nw: 010\nport: 1:30\nsep: 1_000\nnone:\nflag: yes\n")
    assert load_annotations(path) == {
        "ttl": "60",
        "prio": "0x10",
        "w": "010",
        "port": "1:30",
        "sep": "1_000",
        "none": "",
        "flag": "yes",
    }


def test_load_annotations_rejects_nested_values(tmp_path) -> None:
    """Brief: Non-scalar annotation values are rejected.

    Inputs:
      - tmp_path: temporary directory.

    Outputs:
      - None; asserts ValueError naming the key.
    """
    path = _write(tmp_path, "ann.yaml", "a: [1, 2]\n")
    with pytest.raises(ValueError, match="annotation 'a': string value required"):
        load_annotations(path)


def test_main_prints_endpoints(tmp_path, capsys) -> None:
    """Brief: main prints one line per endpoint and exits 0.

    Inputs:
      - tmp_path: temporary directory.
      - capsys: output capture.

    Outputs:
      - None; asserts the printed endpoints.
    """
    path = _write(tmp_path, "ann.yaml", "external-dns.alpha.kubernetes.io/ttl: 10m\n")
    rc = main(["--annotations", path, "--hostname", "app.example.org", "--target", "1.2.3.4", "--target", "lb.example.net"])
    assert rc == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["app.example.org 600 IN A 1.2.3.4", "app.example.org 600 IN CNAME lb.example.net"]


def test_main_srv_with_custom_keys(tmp_path, capsys) -> None:
    """Brief: main builds an SRV endpoint using keys from the YAML config.

    Inputs:
      - tmp_path: temporary directory.
      - capsys: output capture.

    Outputs:
      - None; asserts the printed SRV endpoint.
    """
    cfg = _write(tmp_path, "cfg.yaml", "annotation_prefix: my.org/\n")
    ann = _write(tmp_path, "ann.yaml", "my.org/srv-priority: '1'\nmy.org/srv-weight: '2'\nmy.org/srv-port: '53'\n")
    rc = main(
        [
            "--annotations", ann,
            "--config", cfg,
            "--service", "dns",
            "--hostname", "_dns._udp.example.org",
            "--target", "ns.example.org",
            "--srv",
        ]
    )
    assert rc == 0
    assert capsys.readouterr().out.strip() == "_dns._udp.example.org - IN SRV 1 2 53 ns.example.org"


def test_main_srv_error_exit_code(tmp_path, capsys) -> None:
    """Brief: SRV annotation errors are printed to stderr with exit status 1.

    Inputs:
      - tmp_path: temporary directory.
      - capsys: output capture.

    Outputs:
      - None; asserts exit code and message.
    """
    ann = _write(tmp_path, "ann.yaml", "external-dns.alpha.kubernetes.io/srv-priority: x\n")
    rc = main(["--annotations", ann, "--service", "svc", "--hostname", "_a._tcp.example.org", "--target", "t", "--srv"])
    assert rc == 1
    assert 'priorty value must be int number, got "x". service "svc"' in capsys.readouterr().err


def test_main_strict_ttl_rejects_underscored_ttl(tmp_path, capsys) -> None:
    """Brief: A TTL written as 1_000 reaches validation verbatim and fails to parse.

    Inputs:
      - tmp_path: temporary directory.
      - capsys: output capture.

    Outputs:
      - None; asserts exit code 1 and the parse message.
    """
    ann = _write(
        tmp_path,
        "ann.yaml",
        "external-dns.alpha.kubernetes.io/ttl: 1_000\n"
        "external-dns.alpha.kubernetes.io/srv-priority: '1'\n"
        "external-dns.alpha.kubernetes.io/srv-weight: '1'\n"
        "external-dns.alpha.kubernetes.io/srv-port: '1'\n",
    )
    rc = main(["--annotations", ann, "--hostname", "_a._tcp.example.org", "--target", "t", "--srv", "--strict-ttl"])
    assert rc == 1
    assert '"1_000" is not a valid TTL value' in capsys.readouterr().err


def test_main_srv_requires_single_target(tmp_path) -> None:
    """Brief: --srv without exactly one target exits 1.

    Inputs:
      - tmp_path: temporary directory.

    Outputs:
      - None; asserts exit code.
    """
    ann = _write(tmp_path, "ann.yaml", "{}\n")
    assert main(["--annotations", ann, "--hostname", "_a._tcp.example.org", "--srv"]) == 1


def test_main_missing_annotations_file(tmp_path) -> None:
    """Brief: An unreadable annotations file exits 1.

    Inputs:
      - tmp_path: temporary directory.

    Outputs:
      - None; asserts exit code.
    """
    assert main(["--annotations", str(tmp_path / "missing.yaml"), "--hostname", "a.example.org"]) == 1


def test_main_lenient_ttl_falls_back(tmp_path, capsys) -> None:
    """Brief: Without --strict-ttl an invalid TTL is ignored and the endpoint has no TTL.

    Inputs:
      - tmp_path: temporary directory.
      - capsys: output capture.

    Outputs:
      - None; asserts exit code 0 and an unset TTL.
    """
    ann = _write(tmp_path, "ann.yaml", "external-dns.alpha.kubernetes.io/ttl: 1_000\n")
    rc = main(["--annotations", ann, "--hostname", "a.example.org", "--target", "1.2.3.4"])
    assert rc == 0
    assert capsys.readouterr().out.strip() == "a.example.org - IN A 1.2.3.4"
