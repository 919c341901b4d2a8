from ..utils import (
    get_gitconfig_items_from_env,
    normalize_gitcfg_key,
    set_gitconfig_items_in_env,
)


def test_gitconfig_items_env(monkeypatch):
    monkeypatch.delenv('GIT_CONFIG_COUNT', raising=False)
    assert get_gitconfig_items_from_env() == {}

    monkeypatch.setenv('GIT_CONFIG_COUNT', '3')
    monkeypatch.setenv('GIT_CONFIG_KEY_0', 'ghq.root')
    monkeypatch.setenv('GIT_CONFIG_VALUE_0', '/one')
    monkeypatch.setenv('GIT_CONFIG_KEY_1', 'ghq.root')
    monkeypatch.setenv('GIT_CONFIG_VALUE_1', '/two')
    monkeypatch.setenv('GIT_CONFIG_KEY_2', 'ghq.findvcs')
    monkeypatch.setenv('GIT_CONFIG_VALUE_2', 'git')
    items = get_gitconfig_items_from_env()
    assert items == {
        'ghq.root': ('/one', '/two'),
        'ghq.findvcs': 'git',
    }

    # replacing the items drops all previous declarations
    set_gitconfig_items_in_env({'ghq.root': '/three'})
    assert get_gitconfig_items_from_env() == {'ghq.root': '/three'}
    from os import environ

    assert environ['GIT_CONFIG_COUNT'] == '1'
    assert 'GIT_CONFIG_KEY_1' not in environ
    assert 'GIT_CONFIG_VALUE_2' not in environ

    set_gitconfig_items_in_env({})
    assert 'GIT_CONFIG_COUNT' not in environ


def test_normalize_gitcfg_key():
    assert normalize_gitcfg_key('ghq.findVcs') == 'ghq.findvcs'
    assert normalize_gitcfg_key('GHQ.root') == 'ghq.root'
    # subsections keep their case
    assert normalize_gitcfg_key('Sec.SubSec.Name') == 'sec.SubSec.name'
    assert normalize_gitcfg_key('Sec.Sub.Sec.Name') == 'sec.Sub.Sec.name'
    assert normalize_gitcfg_key('nodot') == 'nodot'
