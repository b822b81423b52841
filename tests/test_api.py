import io

import pytest

from huffarc.api import run_archivator
from huffarc.types import ArchivatorError, Mode, SetupSettings


def test_full_cycle(tmp_path):
    src = tmp_path / "data.txt"
    src.write_bytes(b"some data for the api test")
    stream = io.StringIO()
    created = run_archivator(
        SetupSettings(mode=Mode.ARCHIVATE, files_to_archivate=[str(src)], archive_path=str(tmp_path / "arc")),
        stream,
    )
    assert [r.path for r in created] == [str(src)]
    archive = tmp_path / "arc.mach"
    assert archive.is_file()

    check_stream = io.StringIO()
    run_archivator(SetupSettings(mode=Mode.CHECK, archive_path=str(archive)), check_stream)
    assert "Archive status: OK" in check_stream.getvalue()

    out = tmp_path / "out"
    out.mkdir()
    extracted = run_archivator(
        SetupSettings(mode=Mode.DEARCHIVATE, archive_path=str(archive), dest_dir=str(out)), io.StringIO()
    )
    assert len(extracted) == 1
    assert (out / "data.txt").read_bytes() == src.read_bytes()


def test_info_mode_dispatch(tmp_path):
    src = tmp_path / "f.txt"
    src.write_bytes(b"abc")
    run_archivator(
        SetupSettings(mode=Mode.ARCHIVATE, files_to_archivate=[str(src)], archive_path=str(tmp_path / "arc")),
        io.StringIO(),
    )
    stream = io.StringIO()
    results = run_archivator(SetupSettings(mode=Mode.INFO, archive_path=str(tmp_path / "arc.mach")), stream)
    assert [r.path for r in results] == ["f.txt"]
    assert "TOTAL:" in stream.getvalue()


def test_no_mode_does_nothing():
    assert run_archivator(SetupSettings(), io.StringIO()) == []


def test_errors_propagate(tmp_path):
    with pytest.raises(ArchivatorError, match="Can't open path"):
        run_archivator(
            SetupSettings(
                mode=Mode.ARCHIVATE,
                files_to_archivate=[str(tmp_path / "missing")],
                archive_path=str(tmp_path / "arc"),
            ),
            io.StringIO(),
        )