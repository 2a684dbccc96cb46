import shutil
import subprocess
from pathlib import Path

import pytest

from mksysimage.lib import command, hostcheck
from mksysimage.request import BuildRequest, SourceSpec

LOOP_DEVICE = "/dev/loop7"


class FakeHost:
    """Stands in for the external programs the pipeline drives."""

    def __init__(self):
        self.calls = []
        self.failures = []
        self.missing = set()

    def fail_when(self, predicate, returncode=1, stderr="boom"):
        self.failures.append((predicate, returncode, stderr))

    def which(self, name):
        return None if name in self.missing else f"/usr/bin/{name}"

    def commands(self):
        return [c["argv"] for c in self.calls]

    def run(self, argv, input=None, cwd=None, **kwargs):
        argv = list(argv)
        self.calls.append({"argv": argv, "cwd": cwd, "input": input})

        for predicate, returncode, stderr in self.failures:
            if predicate(argv):
                return subprocess.CompletedProcess(argv, returncode, "", stderr)

        stdout = ""
        prog = argv[0]
        if prog == "dd" and argv[1] == "if=/dev/zero":
            Path(argv[2][len("of="):]).write_bytes(b"")
        elif prog == "losetup" and "--show" in argv:
            stdout = LOOP_DEVICE + "\n"
        elif prog == "umount":
            mountpoint = Path(argv[-1])
            for child in mountpoint.iterdir():
                if child.is_dir():
                    shutil.rmtree(child)
                else:
                    child.unlink()
        elif prog == "vboxmanage" and argv[1] == "convertfromraw":
            Path(argv[3]).write_bytes(b"converted")
        elif prog == "find":
            stdout = ".\n./boot\n./boot/syslinux.cfg\n"
        return subprocess.CompletedProcess(argv, 0, stdout, "")


@pytest.fixture
def host(monkeypatch):
    h = FakeHost()
    monkeypatch.setattr(command.subprocess, "run", h.run)
    monkeypatch.setattr(hostcheck.shutil, "which", h.which)
    return h


@pytest.fixture
def inputs(tmp_path):
    kernel = tmp_path / "vmlinuz"
    kernel.write_bytes(b"kernel")
    mbr = tmp_path / "mbr.bin"
    mbr.write_bytes(b"\0" * 440)
    system = tmp_path / "system"
    (system / "etc").mkdir(parents=True)
    (system / "etc" / "hostname").write_text("box\n", encoding="utf-8")
    conf = tmp_path / "conf.tgz"
    conf.write_bytes(b"not really a tarball")
    mnt = tmp_path / "mnt"
    mnt.mkdir()
    return {
        "kernel": kernel,
        "mbr": mbr,
        "system": system,
        "conf": conf,
        "mnt": mnt,
        "out": tmp_path / "out.raw",
    }


@pytest.fixture
def make_request(inputs):
    def _make(**overrides):
        values = dict(
            output_path=inputs["out"],
            kernel_path=inputs["kernel"],
            sources=(
                SourceSpec("/", str(inputs["system"])),
                SourceSpec("/etc", str(inputs["conf"])),
            ),
            mbr_path=inputs["mbr"],
            temp_dir=str(inputs["mnt"]),
        )
        values.update(overrides)
        return BuildRequest(**values)

    return _make
