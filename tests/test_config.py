import json

import pytest

from budget_analytics import cadence, config


def test_shipped_defaults():
    settings = config.load_config('analytics')

    assert settings['labels']['uncategorized'] == 'Uncategorized'
    assert settings['cadence']['thresholds'] == {'weekly': 8, 'biweekly': 16, 'monthly': 31}
    assert settings['cadence']['fallback'] == 'biweekly'


def test_missing_settings_file():
    with pytest.raises(FileNotFoundError):
        config.load_config('does_not_exist')


def test_override_file_merges_into_defaults(tmp_path, monkeypatch):
    override = tmp_path / 'override.json'
    override.write_text(json.dumps({'cadence': {'thresholds': {'weekly': 9}}}), encoding='utf-8')
    monkeypatch.setenv(config.CONFIG_OVERRIDE_ENV, str(override))

    settings = config.get_analytics_config()

    assert settings['cadence']['thresholds'] == {'weekly': 9, 'biweekly': 16, 'monthly': 31}
    assert settings['cadence']['fallback'] == 'biweekly'
    assert config.get_config_value('cadence', 'thresholds', 'weekly') == 9


@pytest.mark.parametrize('content', ['{not json', '[1, 2, 3]'])
def test_bad_override_falls_back_to_defaults(tmp_path, monkeypatch, content):
    override = tmp_path / 'override.json'
    override.write_text(content, encoding='utf-8')
    monkeypatch.setenv(config.CONFIG_OVERRIDE_ENV, str(override))

    assert config.get_analytics_config() == config.load_config('analytics')


def test_missing_override_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv(config.CONFIG_OVERRIDE_ENV, str(tmp_path / 'absent.json'))
    assert config.get_config_value('labels', 'no_category') == 'None'


def test_get_config_value_default():
    assert config.get_config_value('nope', 'nothing', default=3) == 3


def _override(tmp_path, monkeypatch, values):
    override = tmp_path / 'override.json'
    override.write_text(json.dumps(values), encoding='utf-8')
    monkeypatch.setenv(config.CONFIG_OVERRIDE_ENV, str(override))


def test_get_number_value_casts_settings(tmp_path, monkeypatch):
    _override(tmp_path, monkeypatch, {'validation': {'amount_max': '2500'}})

    assert config.get_number_value('validation', 'amount_max', default=1) == 2500.0
    assert config.get_number_value('validation', 'date_lookback_years', default=5, cast=int) == 1
    assert config.get_number_value('validation', 'missing', default=7) == 7.0


@pytest.mark.parametrize('bad_value', ['x', None, [1, 2], {'nested': 1}])
def test_uncastable_number_falls_back_to_default(tmp_path, monkeypatch, caplog, bad_value):
    _override(tmp_path, monkeypatch, {'validation': {'date_lookback_years': bad_value}})

    value = config.get_number_value('validation', 'date_lookback_years', default=1, cast=int)

    assert value == 1
    assert 'validation.date_lookback_years' in caplog.text


@pytest.mark.parametrize('thresholds', [
    {'weekly': 'x'},
    {'weekly': None, 'monthly': 'thirty'},
    'not a mapping',
    [8, 16, 31],
])
def test_bad_cadence_thresholds_keep_defaults(tmp_path, monkeypatch, thresholds):
    _override(tmp_path, monkeypatch, {'cadence': {'thresholds': thresholds}})

    assert cadence._load_thresholds() == {'weekly': 8.0, 'biweekly': 16.0, 'monthly': 31.0}


def test_partial_bad_thresholds_keep_good_values(tmp_path, monkeypatch):
    _override(tmp_path, monkeypatch, {'cadence': {'thresholds': {'weekly': '9', 'biweekly': 'x'}}})

    assert cadence._load_thresholds() == {'weekly': 9.0, 'biweekly': 16.0, 'monthly': 31.0}


def test_bad_cadence_fallback_keeps_biweekly(tmp_path, monkeypatch):
    _override(tmp_path, monkeypatch, {'cadence': {'fallback': ['monthly']}})

    assert cadence._load_fallback() == cadence.BIWEEKLY
