import pytest

from ghq_core.config import (
    ConfigItem,
    get_manager,
)
from ghq_core.consts import (
    GHQ_FINDVCS_CFGKEY,
    GHQ_ROOT_CFGKEY,
)
from ghq_core.runners import call_git_lines


def test_manager_setup():
    """Test the actual global configuration manager"""
    manager = get_manager()
    target_sources = [
        'git-command',
        'git-global',
        'git-system',
        'defaults',
    ]
    absurd_must_be_absent_key = 'nobody.would.use.such.a.key'
    # the order of sources is the precedence rule
    assert list(manager.sources.keys()) == target_sources
    assert absurd_must_be_absent_key not in manager
    with pytest.raises(KeyError):
        manager[absurd_must_be_absent_key]
    assert 'ConfigManager(' in repr(manager)
    assert 'GitEnvironment' in repr(manager)
    # process-unique
    assert get_manager() is manager
    # all settings queried by the package are declared
    for k in (GHQ_ROOT_CFGKEY, GHQ_FINDVCS_CFGKEY):
        assert k in manager.sources['defaults']


def test_manager_overrides():
    manager = get_manager()
    gitcmd = manager.sources['git-command']
    key = 'ghqtest.overrides'
    gitcmd[key] = ConfigItem('before')
    try:
        assert key in gitcmd
        with manager.overrides(
            {
                key: ConfigItem('during'),
                'ghqtest.tuple': (ConfigItem('ping'), ConfigItem('pong')),
            }
        ) as m:
            assert m is manager
            assert manager[key].value == 'during'
            assert manager.get_values('ghqtest.tuple') == ('ping', 'pong')
            # visible to git processes
            assert call_git_lines(['config', '--get-all', 'ghqtest.tuple']) == [
                'ping',
                'pong',
            ]
            # changes inside the context are rolled back too
            gitcmd['ghqtest.inside'] = ConfigItem('x')
        assert manager[key].value == 'before'
        assert 'ghqtest.tuple' not in manager
        assert 'ghqtest.inside' not in manager
    finally:
        del gitcmd[key]
    assert key not in manager


def test_manager_get_values_unset():
    manager = get_manager()
    assert manager.get_values('nobody.would.use.such.a.key') == ()
    with manager.overrides({'ghqtest.empty': ConfigItem('')}):
        # an empty value is still a value
        assert manager.get_values('ghqtest.empty') == ('',)


@pytest.mark.usefixtures('cfgman')
def test_manager_get_values_precedence():
    manager = get_manager()
    key = 'ghqtest.multi'
    ggc = manager.sources['git-global']
    ggc.add(key, ConfigItem('global1'))
    ggc.add(key, ConfigItem('global2'))
    # multiple values of a single source, in declaration order
    assert manager.get_values(key) == ('global1', 'global2')
    # a higher-precedence source wins entirely, values are not merged
    with manager.overrides({key: ConfigItem('command')}):
        assert manager.get_values(key) == ('command',)
    assert manager.get_values(key) == ('global1', 'global2')
