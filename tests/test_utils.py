"""Tests for JSON helpers, the store and logging setup."""

import json
import logging

import pytest

from premfantasy.constants import STORAGE_KEYS
from premfantasy.logging_config import get_logger, setup_logging
from premfantasy.schemas import H2HRecordFile
from premfantasy.storage import reset_user_data
from premfantasy.utils import load_json, load_json_safe, save_json


class TestJsonHelpers:
    """Tests for load_json/save_json/load_json_safe."""

    def test_save_then_load(self, tmp_path):
        path = tmp_path / 'nested' / 'record.json'
        save_json(path, {'name': 'Ødegaard'})
        assert load_json(path) == {'name': 'Ødegaard'}
        assert 'Ødegaard' in path.read_text(encoding='utf-8')

    def test_save_model_by_alias(self, tmp_path, make_player):
        path = tmp_path / 'player.json'
        save_json(path, make_player(1, 'GK', team_id=4))
        assert json.loads(path.read_text(encoding='utf-8'))['teamId'] == 4

    def test_no_temp_files_left(self, tmp_path):
        save_json(tmp_path / 'a.json', [1, 2])
        save_json(tmp_path / 'a.json', [3])
        assert [p.name for p in tmp_path.iterdir()] == ['a.json']

    def test_unserializable_data(self, tmp_path):
        with pytest.raises(TypeError):
            save_json(tmp_path / 'bad.json', {'x': object()})
        assert not (tmp_path / 'bad.json').exists()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / 'absent.json')

    def test_malformed_json(self, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text('{"wins": ', encoding='utf-8')
        with pytest.raises(json.JSONDecodeError):
            load_json(path)

    def test_schema_mismatch(self, tmp_path):
        path = tmp_path / 'record.json'
        path.write_text(json.dumps({'wins': -1}), encoding='utf-8')
        with pytest.raises(ValueError, match='H2HRecordFile'):
            load_json(path, schema=H2HRecordFile)

    def test_safe_variant_falls_back(self, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text('not json', encoding='utf-8')
        assert load_json_safe(path, default={}) == {}
        assert load_json_safe(tmp_path / 'absent.json', default=[]) == []


class TestJsonStore:
    """Tests for JsonStore record handling."""

    def test_records_are_independent(self, store):
        store.save(STORAGE_KEYS['SQUAD'], [])
        store.save(STORAGE_KEYS['RULES'], {'version': 1, 'rules': {}})
        store.remove(STORAGE_KEYS['SQUAD'])
        assert not store.exists(STORAGE_KEYS['SQUAD'])
        assert store.exists(STORAGE_KEYS['RULES'])

    def test_remove_missing_is_noop(self, store):
        store.remove('nothing')

    def test_reset_user_data_keeps_rules_and_h2h(self, store):
        for key in STORAGE_KEYS.values():
            store.save(key, {})
        reset_user_data(store)

        remaining = {key for key in STORAGE_KEYS.values() if store.exists(key)}
        assert remaining == {'scoring_rules', 'h2h_opponent', 'h2h_record', 'h2h_history'}


class TestLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger('premfantasy')
        handlers, level = list(logger.handlers), logger.level
        yield
        for handler in logger.handlers:
            handler.close()
        logger.handlers = handlers
        logger.setLevel(level)

    def test_file_and_console_handlers(self, tmp_path):
        logger = setup_logging(log_dir=tmp_path / 'logs', level=logging.DEBUG)
        assert len(logger.handlers) == 2
        get_logger('ledger').info('GW1 stored')

        log_files = list((tmp_path / 'logs').glob('premfantasy_*.log'))
        assert len(log_files) == 1
        for handler in logger.handlers:
            handler.flush()
        assert 'GW1 stored' in log_files[0].read_text(encoding='utf-8')

    def test_repeat_setup_replaces_handlers(self):
        setup_logging(log_to_file=False)
        logger = setup_logging(log_to_file=False, level=logging.WARNING)
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_get_logger_names(self):
        assert get_logger().name == 'premfantasy'
        assert get_logger('rival').name == 'premfantasy.rival'
