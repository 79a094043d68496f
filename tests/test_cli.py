import io
import sys

import pytest

from bbd.cli import DEFAULT_COLUMNS, main, render_markdown


def _stdin(monkeypatch, data: bytes) -> None:
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data), encoding="utf-8"))


def test_encode_file_with_default_style(tmp_path, capsys) -> None:
    source = tmp_path / "data.bin"
    source.write_bytes(bytes([0, 1, 255]))

    main([str(source)])

    assert capsys.readouterr().out == "⠀⠈⣿\n"


def test_encode_wraps_at_default_columns(tmp_path, capsys) -> None:
    source = tmp_path / "data.bin"
    source.write_bytes(bytes(DEFAULT_COLUMNS + 1))

    main(["-s", "direct", str(source)])

    assert capsys.readouterr().out == "⠀" * DEFAULT_COLUMNS + "\\\n⠀\n"


def test_encode_continues_columns_across_files(tmp_path, capsys) -> None:
    first = tmp_path / "a.bin"
    second = tmp_path / "b.bin"
    first.write_bytes(bytes(3))
    second.write_bytes(bytes(3))

    main(["-s", "direct", "-c", "4", str(first), str(second)])

    assert capsys.readouterr().out == "⠀⠀⠀\n⠀\\\n⠀⠀\n"


def test_encode_markdown(tmp_path, capsys) -> None:
    source = tmp_path / "data.bin"
    source.write_bytes(b"\x00")

    main(["-m", "-s", "direct", str(source)])

    out = capsys.readouterr().out
    assert out == render_markdown(str(source), "⠀") + "\n"
    assert out.startswith(f"`{source}`:\n\n```\n⠀\n```\n")


def test_encode_reads_stdin_by_default(monkeypatch, capsys) -> None:
    _stdin(monkeypatch, b"\x01\x02")

    main(["-s", "direct", "-c", "0"])

    assert capsys.readouterr().out == "⠁⠂\n"


def test_decode_to_output_file(tmp_path) -> None:
    source = tmp_path / "dump.txt"
    target = tmp_path / "out.bin"
    source.write_text("⠀⢀\\\n⣿\n", encoding="utf-8")

    main(["-d", "-o", str(target), str(source)])

    assert target.read_bytes() == bytes([0, 8, 255])


def test_decode_writes_raw_bytes_to_stdout(monkeypatch, capsysbinary) -> None:
    _stdin(monkeypatch, "⣿⠀\n".encode("utf-8"))

    main(["-d", "-s", "direct"])

    assert capsysbinary.readouterr().out == b"\xff\x00"


def test_round_trip_through_files(tmp_path) -> None:
    data = bytes(range(256)) * 3
    source = tmp_path / "data.bin"
    dump = tmp_path / "dump.txt"
    restored = tmp_path / "restored.bin"
    source.write_bytes(data)

    main(["-s", "nrbt", "-c", "32", "-o", str(dump), str(source)])
    main(["-d", "-s", "nrbt", "-o", str(restored), str(dump)])

    assert restored.read_bytes() == data


def test_round_trip_with_ecc_repairs_damage(tmp_path) -> None:
    data = b"protected payload"
    source = tmp_path / "data.bin"
    dump = tmp_path / "dump.txt"
    restored = tmp_path / "restored.bin"
    source.write_bytes(data)

    main(["-s", "direct", "-c", "0", "--ecc-symbols", "8", "-o", str(dump), str(source)])
    text = dump.read_text(encoding="utf-8")
    damaged = text[:4] + chr(ord(text[4]) ^ 0x0F) + text[5:]
    dump.write_text(damaged, encoding="utf-8")
    main(["-d", "-s", "direct", "--ecc-symbols", "8", "-o", str(restored), str(dump)])

    assert restored.read_bytes() == data


def test_bcd_out_of_range_exits_with_error(tmp_path) -> None:
    source = tmp_path / "data.bin"
    source.write_bytes(bytes([42, 100]))

    with pytest.raises(SystemExit) as excinfo:
        main(["-s", "bcd", str(source)])

    assert "Invalid BCD value: 100!" in str(excinfo.value.code)


def test_strict_decode_rejects_foreign_text(tmp_path) -> None:
    source = tmp_path / "dump.txt"
    source.write_text("⠁hello", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["-d", "--strict", str(source)])

    assert "Decode Error" in str(excinfo.value.code)


def test_missing_path_exits_with_status_1(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "nope.bin")])

    assert excinfo.value.code == 1
    assert "does not exist" in capsys.readouterr().err


def test_directory_path_exits_with_status_2(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path)])

    assert excinfo.value.code == 2
    assert "is not a file" in capsys.readouterr().err


def test_paths_checked_before_any_output(tmp_path, capsys) -> None:
    good = tmp_path / "good.bin"
    good.write_bytes(b"\x00")

    with pytest.raises(SystemExit):
        main([str(good), str(tmp_path / "missing.bin")])

    assert capsys.readouterr().out == ""


def test_markdown_conflicts_with_decode() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["-d", "-m"])

    assert excinfo.value.code == 2


def test_unknown_style_is_rejected() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["-s", "braille"])

    assert excinfo.value.code == 2


def test_list_styles(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--list"])

    out = capsys.readouterr().out
    assert excinfo.value.code == 0
    for name in ("bcd", "direct", "nlbb", "nlbt", "nrbb", "nrbt"):
        assert name in out


def test_verbose_logs_to_stderr(tmp_path, capsys) -> None:
    source = tmp_path / "data.bin"
    source.write_bytes(b"abc")

    main(["-v", str(source)])

    err = capsys.readouterr().err
    assert "[INFO] Style 'nlbb'" in err
    assert "encoded 3 byte(s)" in err


def test_decode_passes_carriage_return_to_codec(tmp_path) -> None:
    source = tmp_path / "dump.txt"
    target = tmp_path / "out.bin"
    source.write_bytes("⠁\r\n⠂".encode("utf-8"))

    main(["-d", "-s", "direct", "-o", str(target), str(source)])

    assert len(target.read_bytes()) == 3
    assert target.read_bytes()[0] == 1
    assert target.read_bytes()[2] == 2


def test_decode_stdin_passes_carriage_return_to_codec(monkeypatch, capsysbinary) -> None:
    _stdin(monkeypatch, "⠁\r\n⠂".encode("utf-8"))

    main(["-d", "-s", "direct"])

    assert len(capsysbinary.readouterr().out) == 3


@pytest.mark.parametrize("header", [bytes([0xEC, 255]), bytes([0xEC, 0]), bytes([0xEC, 10])])
def test_ecc_decode_of_unprotected_dump_does_not_crash(tmp_path, header: bytes) -> None:
    data = header + bytes([1, 2])
    dump = tmp_path / "dump.txt"
    restored = tmp_path / "restored.bin"
    main(["-s", "direct", "-o", str(dump), str(_write(tmp_path, data))])

    main(["-d", "-s", "direct", "--ecc-symbols", "4", "-o", str(restored), str(dump)])

    assert restored.exists()


def test_ecc_decode_warns_when_header_is_missing(tmp_path, capsys) -> None:
    dump = tmp_path / "dump.txt"
    dump.write_text("⣬⠀⠁", encoding="utf-8")

    main(["-v", "-d", "-s", "direct", "--ecc-symbols", "4", "-o", str(tmp_path / "out.bin"), str(dump)])

    assert "no ECC header found" in capsys.readouterr().err


def test_verbose_names_registered_style(tmp_path, capsys) -> None:
    main(["-v", "-s", "nrbb", str(_write(tmp_path, b"x"))])

    assert "[INFO] Style 'nrbb'" in capsys.readouterr().err


def _write(tmp_path, data: bytes):
    source = tmp_path / "data.bin"
    source.write_bytes(data)
    return source
