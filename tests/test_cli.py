from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from vcard_codec.cli import app

runner = CliRunner()

VCF = (
    "BEGIN:VCARD\r\n"
    "VERSION:3.0\r\n"
    "FN:Acme\r\n"
    "LOGO;ENCODING=b;TYPE=png:QQ==\r\n"
    "LOGO;VALUE=uri:http://x.com/a.png\r\n"
    "END:VCARD\r\n"
)


@pytest.fixture
def vcf(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "acme.vcf"
    path.write_text(VCF, encoding="utf-8", newline="")
    return path


def test_convert_to_stdout(vcf: Path):
    result = runner.invoke(app, ["convert", str(vcf), "--to", "4.0"])
    assert result.exit_code == 0
    assert "LOGO:data:image/png;base64,QQ==" in result.stdout
    assert "VERSION:4.0" in result.stdout


def test_convert_to_file(vcf: Path, tmp_path: Path):
    out = tmp_path / "out.vcf"
    result = runner.invoke(app, ["convert", str(vcf), "--to", "2.1", "-o", str(out)])
    assert result.exit_code == 0
    assert "LOGO;ENCODING=BASE64;TYPE=png:QQ==" in out.read_text(encoding="utf-8")


def test_convert_unknown_version(vcf: Path):
    result = runner.invoke(app, ["convert", str(vcf), "--to", "9.9"])
    assert result.exit_code == 2


def test_missing_file(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["inspect", str(tmp_path / "missing.vcf")])
    assert result.exit_code == 2


def test_inspect(vcf: Path):
    result = runner.invoke(app, ["inspect", str(vcf)])
    assert result.exit_code == 0
    assert "LOGO" in result.stdout
    assert "inline" in result.stdout


def test_extract(vcf: Path, tmp_path: Path):
    out_dir = tmp_path / "payloads"
    result = runner.invoke(app, ["extract", str(vcf), "--dir", str(out_dir)])
    assert result.exit_code == 0
    assert (out_dir / "logo0.png").read_bytes() == b"A"


def test_html(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    page = tmp_path / "about.html"
    page.write_text('<img class="logo" src="/logo.png">', encoding="utf-8")
    result = runner.invoke(app, ["html", str(page), "--base-url", "http://x.com/", "--to", "4.0"])
    assert result.exit_code == 0
    assert "LOGO:http://x.com/logo.png" in result.stdout


def test_default_version_from_config(vcf: Path, tmp_path: Path):
    (tmp_path / "vcard-codec.toml").write_text('default_version = "2.1"\n')
    result = runner.invoke(app, ["convert", str(vcf)])
    assert result.exit_code == 0
    assert "VERSION:2.1" in result.stdout


def test_init_writes_config(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    assert (tmp_path / "vcard-codec.toml").exists()
