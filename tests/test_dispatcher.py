"""
Tests for command dispatch, flag grammar and exit codes
"""

import io
import logging

import pytest

from gtask.dispatcher import Dispatcher
from gtask.errors import (
    EXIT_AUTH_ERROR,
    EXIT_BACKEND_ERROR,
    EXIT_SUCCESS,
    EXIT_USER_ERROR,
    AuthError,
    BackendError,
    ConfigError,
)
from gtask.registry import Command, Registry


class SpyCommand(Command):
    """Records invocations instead of doing anything"""

    name = 'spy'
    aliases = ('s',)

    def __init__(self, requires_auth=True):
        self.requires_auth = requires_auth
        self.invocations = []

    def register_flags(self, flags):
        flags.add_string('list')
        flags.add_int('page', default=1)

    def run(self, inv):
        self.invocations.append(inv)


def run(dispatcher, *args):
    out, err = io.StringIO(), io.StringIO()
    code = dispatcher.run(list(args), out, err)
    return code, out.getvalue(), err.getvalue()


class TestCommandSelection:

    def test_unknown_command(self, run_cli):
        result = run_cli('unknowncmd')
        assert result.code == EXIT_USER_ERROR
        assert result.out == ''
        assert result.err == 'error: unknown command: unknowncmd\n'

    def test_flag_before_command(self, run_cli):
        result = run_cli('--quiet')
        assert result.code == EXIT_USER_ERROR
        assert result.err == 'error: unknown command: --quiet\n'

    def test_flag_before_valid_command(self, run_cli):
        result = run_cli('--quiet', 'list')
        assert result.code == EXIT_USER_ERROR
        assert result.err == 'error: unknown command: --quiet\n'

    def test_command_names_are_case_sensitive(self, run_cli):
        assert run_cli('HELP').err == 'error: unknown command: HELP\n'

    def test_no_arguments_runs_list(self, run_cli, source):
        source.add_task('@default', 't1', 'Buy milk')
        result = run_cli()
        assert result.code == EXIT_SUCCESS
        assert result.out == '   1  Buy milk\n'

    def test_alias(self, run_cli, source):
        result = run_cli('create', 'Buy', 'milk')
        assert result.code == EXIT_SUCCESS
        assert source.count('create_task', '@default', 'Buy milk') == 1


class TestFlagParsing:

    def test_help(self, run_cli):
        result = run_cli('help')
        assert result.code == EXIT_SUCCESS
        assert result.err == ''
        assert result.out.startswith('Usage:\n')

    def test_version(self, run_cli):
        result = run_cli('version')
        assert result.code == EXIT_SUCCESS
        assert result.out == 'gtask 0.1.0\n'

    def test_unknown_flag(self, run_cli):
        result = run_cli('help', '--unknown')
        assert result.code == EXIT_USER_ERROR
        assert result.err == 'error: unknown flag: --unknown\n'

    def test_flag_of_other_command(self, run_cli):
        assert run_cli('lists', '--force').err == 'error: unknown flag: --force\n'

    def test_flag_needs_argument(self, run_cli):
        result = run_cli('list', '--page')
        assert result.code == EXIT_USER_ERROR
        assert result.err == 'error: flag needs an argument: --page\n'

    def test_invalid_int_flag(self, run_cli):
        result = run_cli('list', '--page', 'x', 'Work')
        assert result.code == EXIT_USER_ERROR
        assert result.err == 'error: invalid value "x" for flag --page\n'

    def test_dash_token_after_positional_is_positional(self, run_cli, source):
        source.add_task('@default', 't1', 'Buy milk')
        result = run_cli('done', '1', '-x')
        assert result.code == EXIT_USER_ERROR
        assert result.err == 'error: invalid task reference: -x\n'
        assert source.count('complete_task') == 0

    def test_title_may_contain_flags(self, run_cli, source):
        result = run_cli('add', '--quiet', 'Read', '--list', 'docs')
        assert result.code == EXIT_SUCCESS
        assert result.out == ''
        assert source.count('create_task', '@default', 'Read --list docs') == 1

    def test_common_and_command_flags_interleave(self):
        spy = SpyCommand()
        registry = Registry()
        registry.register(spy)
        dispatcher = Dispatcher(registry, lambda config: object())

        code, _, _ = run(dispatcher, 's', '--page=3', '--quiet', '-list', 'Work', '--config', '/tmp/g', 'a', '-b')

        assert code == EXIT_SUCCESS
        inv = spy.invocations[0]
        assert inv.options == {'list': 'Work', 'page': 3}
        assert inv.args == ['a', '-b']
        assert inv.config.quiet is True
        assert str(inv.config.dir) == '/tmp/g'

    def test_debug_enables_logging(self, run_cli):
        run_cli('version', '--debug')
        assert logging.getLogger('gtask').level == logging.DEBUG
        run_cli('version')
        assert logging.getLogger('gtask').level == logging.WARNING


class TestAuthGating:

    def _dispatcher(self, spy, factory):
        registry = Registry()
        registry.register(spy)
        return Dispatcher(registry, factory)

    def test_source_passed_to_command(self):
        spy = SpyCommand()
        source = object()
        code, _, _ = run(self._dispatcher(spy, lambda config: source), 'spy')
        assert code == EXIT_SUCCESS
        assert spy.invocations[0].source is source

    @pytest.mark.parametrize('error,code,message', [
        (AuthError('not logged in (run: gtask login)'), EXIT_AUTH_ERROR,
         'error: not logged in (run: gtask login)\n'),
        (ConfigError('invalid config.yaml: bad'), EXIT_AUTH_ERROR,
         'error: invalid config.yaml: bad\n'),
        (BackendError('request timed out'), EXIT_BACKEND_ERROR,
         'error: backend error: request timed out\n'),
    ])
    def test_factory_failure_skips_command(self, error, code, message):
        spy = SpyCommand()

        def factory(config):
            raise error

        result = run(self._dispatcher(spy, factory), 'spy')

        assert result == (code, '', message)
        assert spy.invocations == []

    def test_no_auth_command_skips_factory(self):
        spy = SpyCommand(requires_auth=False)

        def factory(config):
            raise AssertionError('factory must not be called')

        code, _, _ = run(self._dispatcher(spy, factory), 'spy')
        assert code == EXIT_SUCCESS
        assert spy.invocations[0].source is None

    def test_flag_errors_come_before_auth(self):
        spy = SpyCommand()
        calls = []
        result = run(self._dispatcher(spy, calls.append), 'spy', '--nope')
        assert result[0] == EXIT_USER_ERROR
        assert calls == []

    def test_error_message_is_one_line(self):
        spy = SpyCommand()

        def factory(config):
            raise BackendError('HTTP 500: first\nsecond')

        _, _, err = run(self._dispatcher(spy, factory), 'spy')
        assert err == 'error: backend error: HTTP 500: first second\n'
