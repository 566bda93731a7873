"""
Tests for the routebind CLI
"""

import pytest
from click.testing import CliRunner

from routebind import __version__
from routebind.cli import classify, cli
from routebind.descriptors import MethodDescriptor
from tests.fakes import Mailer, Owner, Status


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    """Test --version prints the version"""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert f"ROUTEBIND CLI v{__version__}" in result.output


def test_classify():
    """Test parameter classification"""
    def handler(status: Status, owner: Owner, mailer: Mailer, name: str): ...

    method = MethodDescriptor(handler)
    assert [classify(p) for p in method.parameters()] == ["enum", "routable", "service", "value"]


class TestDescribe:
    """routebind describe"""

    def test_describe_method(self, runner):
        """Test describing a method lists routable parameters"""
        result = runner.invoke(cli, ["describe", "tests.fakes:PetActions", "--method", "show"])

        assert result.exit_code == 0
        assert "tests.fakes.PetActions.show" in result.output
        assert "owner  routable  tests.fakes.Owner" in result.output
        assert "pet    routable  tests.fakes.Pet" in result.output

    def test_describe_constructor(self, runner):
        """Test the constructor is described by default"""
        result = runner.invoke(cli, ["describe", "tests.fakes:SignupHandler"])

        assert result.exit_code == 0
        assert "tests.fakes.SignupHandler.__init__" in result.output
        assert "notifier  service" in result.output

    def test_describe_enum_and_defaults(self, runner):
        """Test enum classification and defaults"""
        result = runner.invoke(cli, ["describe", "tests.fakes:PetActions", "-m", "rename"])

        assert result.exit_code == 0
        assert "name  value" in result.output
        assert "loud  value     bool = False" in result.output

        result = runner.invoke(cli, ["describe", "tests.fakes:StatusPage"])
        assert "status  enum" in result.output

    def test_describe_var_keyword(self, runner):
        """Test **kwargs is reported"""
        result = runner.invoke(cli, ["describe", "tests.fakes:PetActions", "-m", "extras"])
        assert "**kwargs" in result.output

    def test_describe_without_constructor(self, runner):
        """Test a class with no constructor"""
        result = runner.invoke(cli, ["describe", "tests.fakes:PetActions"])

        assert result.exit_code == 0
        assert "has no constructor" in result.output

    def test_describe_missing_method(self, runner):
        """Test an unknown method exits with 1"""
        result = runner.invoke(cli, ["describe", "tests.fakes:PetActions", "-m", "missing"])

        assert result.exit_code == 1
        assert "has no method 'missing'" in result.output

    def test_describe_bad_target(self, runner):
        """Test unimportable and malformed targets"""
        assert runner.invoke(cli, ["describe", "no_such_module:Thing"]).exit_code == 2
        assert runner.invoke(cli, ["describe", "tests.fakes:Nothing"]).exit_code == 2
        assert runner.invoke(cli, ["describe", "tests.fakes:LOOKUPS"]).exit_code == 2
        assert runner.invoke(cli, ["describe", "Thing"]).exit_code == 2


class TestMatch:
    """routebind match"""

    def test_match(self, runner):
        """Test a matching path prints the bag in order"""
        result = runner.invoke(cli, ["match", "users/{user}/dogs/{dog:slug}", "/users/1/dogs/rex", "--scoped"])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert "  user = '1'" in lines
        assert "  dog = 'rex'  (field: slug)" in lines
        assert lines.index("  user = '1'") < lines.index("  dog = 'rex'  (field: slug)")
        assert "Scoped bindings: yes" in lines
        assert "Trashed bindings: no" in lines

    def test_match_with_trashed(self, runner):
        result = runner.invoke(cli, ["match", "dogs/{dog}", "dogs/3", "--with-trashed"])

        assert result.exit_code == 0
        assert "Scoped bindings: no" in result.output
        assert "Trashed bindings: yes" in result.output

    def test_mismatch(self, runner):
        """Test a non-matching path exits with 1"""
        result = runner.invoke(cli, ["match", "users/{user}", "/teams/1"])

        assert result.exit_code == 1
        assert "does not match" in result.output

    def test_bad_pattern(self, runner):
        """Test a duplicate placeholder is a usage error"""
        result = runner.invoke(cli, ["match", "a/{id}/b/{id}", "/a/1/b/2"])
        assert result.exit_code == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
