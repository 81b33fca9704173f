"""
Tests for CPI Wrap configuration loading
"""
import pytest
import yaml
from pathlib import Path

from cpiwrap.config import (
    ConfigManager,
    CPILintConfig,
    FlashPipeConfig,
    default_tmp_dir,
    expand_path,
)
from cpiwrap.errors import WrapperError


@pytest.fixture
def repo_dir(tmp_path):
    path = tmp_path / 'repo'
    path.mkdir()
    return path


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / 'rules.xml'
    path.write_text('<cpilint><rules/></cpilint>')
    return path


def write_config(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data))
    return path


class TestExpandPath:
    """~ and environment variable expansion"""

    def test_expands_environment_variables(self, monkeypatch, tmp_path):
        monkeypatch.setenv('CPIWRAP_TEST_DIR', str(tmp_path))
        assert expand_path('$CPIWRAP_TEST_DIR/x') == tmp_path / 'x'

    def test_expands_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv('HOME', str(tmp_path))
        assert expand_path('~/config.yaml') == tmp_path / 'config.yaml'

    def test_default_tmp_dir_uses_tmpdir(self, monkeypatch, tmp_path):
        monkeypatch.setenv('TMPDIR', str(tmp_path))
        assert default_tmp_dir() == str(tmp_path / 'cpilint')


class TestResolveConfig:
    """-c option and default config location"""

    def test_explicit_file(self, tmp_path):
        config = write_config(tmp_path / 'config.yaml', {})
        assert ConfigManager.resolve_config(str(config), 'CPILint', '~/nope.yaml') == config

    def test_missing_file(self, tmp_path):
        with pytest.raises(WrapperError, match="CPILint configuration file does not exist"):
            ConfigManager.resolve_config(str(tmp_path / 'missing.yaml'), 'CPILint', '~/nope.yaml')

    def test_default_location(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv('HOME', str(tmp_path))
        config = tmp_path / '.config' / 'flashpipe' / 'config.yaml'
        config.parent.mkdir(parents=True)
        config.write_text('{}')

        resolved = ConfigManager.resolve_config(None, 'FlashPipe', FlashPipeConfig.DEFAULT_CONFIG)

        assert resolved == config
        out = capsys.readouterr().out
        assert "FlashPipe configuration file is not specified" in out
        assert "Using default location: ~/.config/flashpipe/config.yaml" in out


class TestLoadYaml:
    """YAML parsing of configuration files"""

    def test_empty_file_is_empty_mapping(self, tmp_path):
        config = tmp_path / 'config.yaml'
        config.write_text('')
        assert ConfigManager.load_yaml(config, 'CPILint') == {}

    def test_invalid_yaml(self, tmp_path):
        config = tmp_path / 'config.yaml'
        config.write_text('repo_dir: [unclosed')
        with pytest.raises(WrapperError, match="not valid YAML"):
            ConfigManager.load_yaml(config, 'CPILint')

    def test_not_a_mapping(self, tmp_path):
        config = tmp_path / 'config.yaml'
        config.write_text('- a\n- b\n')
        with pytest.raises(WrapperError, match="must contain a mapping"):
            ConfigManager.load_yaml(config, 'CPILint')


class TestCPILintConfig:
    """CPILint configuration keys"""

    def test_all_keys(self, tmp_path, repo_dir, rules_file):
        data = {
            'repo_dir': str(repo_dir),
            'tmp_dir': str(tmp_path / 'tmp'),
            'rules_file': str(rules_file),
        }
        cfg = CPILintConfig.from_dict(data, tmp_path / 'config.yaml')

        assert cfg.repo_dir == repo_dir
        assert cfg.tmp_dir == tmp_path / 'tmp'
        assert cfg.rules_file == rules_file

    def test_repo_dir_required(self, tmp_path):
        with pytest.raises(WrapperError, match="Repository directory is not specified in CPILint"):
            CPILintConfig.from_dict({}, tmp_path / 'config.yaml')

    def test_null_repo_dir_is_not_specified(self, tmp_path):
        with pytest.raises(WrapperError, match="Repository directory is not specified"):
            CPILintConfig.from_dict({'repo_dir': None}, tmp_path / 'config.yaml')

    def test_repo_dir_must_exist(self, tmp_path):
        with pytest.raises(WrapperError, match="Repository directory does not exist"):
            CPILintConfig.from_dict({'repo_dir': str(tmp_path / 'missing')}, tmp_path / 'config.yaml')

    def test_default_tmp_dir(self, monkeypatch, tmp_path, repo_dir, rules_file, capsys):
        monkeypatch.setenv('TMPDIR', str(tmp_path / 'sys-tmp'))
        data = {'repo_dir': str(repo_dir), 'rules_file': str(rules_file)}

        cfg = CPILintConfig.from_dict(data, tmp_path / 'config.yaml')

        assert cfg.tmp_dir == tmp_path / 'sys-tmp' / 'cpilint'
        assert "Temporary directory is not specified in CPILint configuration file" in capsys.readouterr().out

    def test_default_rules_file(self, monkeypatch, tmp_path, repo_dir):
        monkeypatch.setenv('HOME', str(tmp_path))
        rules = tmp_path / '.config' / 'cpilint' / 'rules.xml'
        rules.parent.mkdir(parents=True)
        rules.write_text('<cpilint/>')

        cfg = CPILintConfig.from_dict({'repo_dir': str(repo_dir)}, tmp_path / 'config.yaml')

        assert cfg.rules_file == rules

    def test_rules_file_must_exist(self, tmp_path, repo_dir):
        data = {'repo_dir': str(repo_dir), 'rules_file': str(tmp_path / 'missing.xml')}
        with pytest.raises(WrapperError, match="Rules file does not exist"):
            CPILintConfig.from_dict(data, tmp_path / 'config.yaml')

    def test_load_from_file(self, tmp_path, repo_dir, rules_file):
        config = write_config(tmp_path / 'cpilint.yaml', {
            'repo_dir': str(repo_dir),
            'rules_file': str(rules_file),
        })
        cfg = ConfigManager.load_cpilint_config(str(config))
        assert cfg.config_file == config
        assert cfg.repo_dir == repo_dir


class TestFlashPipeConfig:
    """FlashPipe configuration keys"""

    def test_all_keys(self, tmp_path, repo_dir, capsys):
        data = {'tmn-host': 'tenant.it-cpi001.cfapps.eu10.hana.ondemand.com', 'dir-git-repo': str(repo_dir)}
        cfg = FlashPipeConfig.from_dict(data, tmp_path / 'config.yaml')

        assert cfg.tenant == 'tenant.it-cpi001.cfapps.eu10.hana.ondemand.com'
        assert cfg.git_repo_dir == repo_dir
        out = capsys.readouterr().out
        assert "SAP Cloud Integration tenant: tenant.it-cpi001" in out
        assert f"Local directory: {repo_dir}" in out

    def test_tenant_required(self, tmp_path, repo_dir):
        with pytest.raises(WrapperError, match="SAP Cloud Integration tenant is not specified"):
            FlashPipeConfig.from_dict({'dir-git-repo': str(repo_dir)}, tmp_path / 'config.yaml')

    def test_repo_dir_required(self, tmp_path):
        with pytest.raises(WrapperError, match="Repository directory is not specified in FlashPipe"):
            FlashPipeConfig.from_dict({'tmn-host': 'host'}, tmp_path / 'config.yaml')

    def test_repo_dir_must_exist(self, tmp_path):
        data = {'tmn-host': 'host', 'dir-git-repo': str(tmp_path / 'missing')}
        with pytest.raises(WrapperError, match="Repository directory does not exist"):
            FlashPipeConfig.from_dict(data, tmp_path / 'config.yaml')
