from datetime import datetime

import pytest

from node_build import main as main_module
from node_build.exceptions import ArchiveError, BuildError
from node_build.main import BuildSystem, create_parser

from conftest import FakeDetector, FakeSupervisor, FixedRandom, RecordingArchiver


def _build_system(tmp_path, detector=None, supervisor=None, archiver=None, **kwargs):
    (tmp_path / "src").mkdir(exist_ok=True)
    return BuildSystem(
        working_dir=tmp_path,
        detector=detector or FakeDetector(),
        supervisor=supervisor or FakeSupervisor(),
        archiver=archiver or RecordingArchiver(),
        clock=lambda: datetime(2024, 3, 7, 12, 0),
        rng=FixedRandom(123456789),
        **kwargs
    )


def test_end_to_end_linux(tmp_path):
    supervisor = FakeSupervisor()
    archiver = RecordingArchiver()
    bs = _build_system(tmp_path, supervisor=supervisor, archiver=archiver, use_container=True)

    build_id = bs.run()

    assert str(build_id) == "linux-x64-node-20240307-123456789"
    assert (tmp_path / "src" / "node_build_id.cc").read_text() == \
        'namespace node { char gBuildId[] = "linux-x64-node-20240307-123456789"; }'
    assert [c[1][0] for c in supervisor.calls] == ["build", "run"]
    assert archiver.calls == [
        ("linux-x64-node-20240307-123456789", tmp_path.resolve() / "out" / "Release", ["node"]),
    ]


def test_end_to_end_native_uses_cpu_count(tmp_path):
    supervisor = FakeSupervisor()
    bs = _build_system(tmp_path, detector=FakeDetector(linux=False, tag="macos-x64", cpus=6),
                       supervisor=supervisor)

    bs.run()

    assert supervisor.calls == [
        ("make", ["-j6", "-C", "out", "BUILDTYPE=Release"], tmp_path.resolve()),
    ]


def test_injection_failure_stops_before_build(tmp_path):
    supervisor = FakeSupervisor()
    archiver = RecordingArchiver()
    bs = BuildSystem(working_dir=tmp_path, detector=FakeDetector(),
                     supervisor=supervisor, archiver=archiver)

    # No src/ directory
    with pytest.raises(OSError):
        bs.run()

    assert supervisor.calls == []
    assert archiver.calls == []


def test_failed_build_is_not_archived(tmp_path):
    archiver = RecordingArchiver()
    bs = _build_system(tmp_path, supervisor=FakeSupervisor(exit_codes=[1]), archiver=archiver)

    with pytest.raises(BuildError):
        bs.run()

    assert archiver.calls == []


def test_skip_archive(tmp_path):
    archiver = RecordingArchiver()
    bs = _build_system(tmp_path, archiver=archiver)

    bs.run(skip_archive=True)

    assert archiver.calls == []


def test_missing_archiver_configuration(tmp_path):
    bs = BuildSystem(working_dir=tmp_path, detector=FakeDetector(), supervisor=FakeSupervisor(),
                     clock=lambda: datetime(2024, 3, 7))
    (tmp_path / "src").mkdir()

    with pytest.raises(ArchiveError):
        bs.run()


def test_dry_run_writes_nothing(tmp_path):
    bs = _build_system(tmp_path, dry_run=True)

    bs.run()

    assert not (tmp_path / "src" / "node_build_id.cc").exists()


def test_show_info(tmp_path, capsys):
    _build_system(tmp_path, use_container=True).show_info()

    out = capsys.readouterr().out
    assert "linux-x64" in out
    assert "ContainerStrategy(rebuild_image=True)" in out


def test_parser_ignores_unrelated_arguments():
    args, extra = create_parser().parse_known_args(["--build-container", "--foo", "bar"])

    assert args.build_container is True
    assert args.info is False
    assert extra == ["--foo", "bar"]


def test_parser_ignores_stray_positionals():
    args, extra = create_parser().parse_known_args(["ts-node-extra", "build"])

    assert extra == ["ts-node-extra", "build"]
    assert args.build_container is False


def test_parser_does_not_expand_abbreviations():
    args, extra = create_parser().parse_known_args(["--b", "--dry", "--conf", "x.json"])

    assert args.build_container is False
    assert args.dry_run is False
    assert args.config is None
    assert extra == ["--b", "--dry", "--conf", "x.json"]


def test_parser_flag_defaults_off():
    args, _ = create_parser().parse_known_args([])

    assert args.build_container is False
    assert args.jobs is None


class _StubBuildSystem:
    error = None

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.logger = type("L", (), {"error": lambda self, msg: None})()

    def run(self, skip_archive=False):
        if self.error:
            raise self.error

    def show_info(self):
        pass


@pytest.mark.parametrize("error, code", [
    (None, 0),
    (OSError("read-only file system"), 1),
    (BuildError("Native build", type("R", (), {"exit_code": 2})()), 1),
    (ArchiveError("archiver failed"), 1),
    (KeyboardInterrupt(), 130),
])
def test_main_exit_codes(monkeypatch, error, code):
    stub = type("Stub", (_StubBuildSystem,), {"error": error})
    monkeypatch.setattr(main_module, "BuildSystem", stub)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["--skip-archive"])

    assert excinfo.value.code == code


def test_main_init_failure(monkeypatch, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["--config", str(tmp_path / "missing.yaml")])

    assert excinfo.value.code == 1


def test_main_info_does_not_build(monkeypatch):
    calls = []

    class Recorder(_StubBuildSystem):
        def run(self, skip_archive=False):
            calls.append("run")

        def show_info(self):
            calls.append("info")

    monkeypatch.setattr(main_module, "BuildSystem", Recorder)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["--info", "unrelated"])

    assert excinfo.value.code == 0
    assert calls == ["info"]


def test_scalar_library_setting(tmp_path):
    config_file = tmp_path / "build.yaml"
    config_file.write_text("artifacts:\n  libraries: node\n")
    archiver = RecordingArchiver()
    bs = _build_system(tmp_path, archiver=archiver, config_file=config_file)

    bs.run()

    assert bs.libraries == ["node"]
    assert archiver.calls[0][2] == ["node"]
