import json

import pytest

from sensu_handler import (Event,
                           InvalidCheckName,
                           InvalidEntityName,
                           InvalidTimestamp,
                           MissingCheck,
                           MissingEntity,
                           MissingEvent,
                           UnmarshalError,
                           parse_event,
                           validate_event)
from sensu_handler._event import Check, Entity

from tests.conftest import KEYSPACE, read_fixture


def _valid_event(**overrides) -> Event:
    kwargs = dict(
        timestamp=1591030801,
        entity=Entity(name='webserver01'),
        check=Check(name='check-disk'),
    )
    kwargs.update(overrides)
    return Event(**kwargs)


class TestParseEvent:

    def test_maps_sensu_metadata(self):
        event = parse_event(read_fixture('event-check-entity-override.json'))

        assert event.timestamp == 1591030801
        assert event.id == '3a9e8b7c-1f2d-4e5a-9b6c-7d8e9f0a1b2c'
        assert event.entity.name == 'webserver01'
        assert event.entity.namespace == 'default'
        assert event.entity.entity_class == 'agent'
        assert event.entity.labels == {'region': 'us-east-1'}
        assert event.entity.annotations[f'{KEYSPACE}/path1'] == 'value-entity1'
        assert event.check.name == 'check-disk'
        assert event.check.status == 2
        assert event.check.output == 'CRITICAL - disk usage 97%'
        assert event.check.annotations[f'{KEYSPACE}/path2'] == '1357'

    def test_keeps_raw_document(self):
        event = parse_event('{"timestamp": 5, "metrics": {"points": []}}')
        assert event.raw['metrics'] == {'points': []}

    def test_absent_annotations_are_empty(self):
        event = parse_event(read_fixture('event-no-timestamp.json'))
        assert event.entity.annotations == {}
        assert event.check.annotations == {}
        assert event.timestamp == 0

    def test_accepts_text(self):
        event = parse_event(read_fixture('event-no-override.json').decode())
        assert event.check.name == 'check-disk'

    def test_null_document_is_no_event(self):
        assert parse_event('null') is None

    def test_invalid_json_keeps_parser_message(self):
        data = read_fixture('event-invalid-json.json')
        with pytest.raises(json.JSONDecodeError) as parser_error:
            json.loads(data)

        with pytest.raises(UnmarshalError) as e:
            parse_event(data)

        assert str(e.value) == (
            f'Failed to unmarshal STDIN data: {parser_error.value}')

    def test_empty_input(self):
        with pytest.raises(UnmarshalError) as e:
            parse_event(b'')
        assert str(e.value).startswith('Failed to unmarshal STDIN data: ')

    @pytest.mark.parametrize('data, expected', [
        ('[]', 'cannot unmarshal array into event'),
        ('"event"', 'cannot unmarshal string into event'),
        ('{"timestamp": "now"}', 'event.timestamp of type int'),
        ('{"timestamp": 1.5}', 'event.timestamp of type int'),
        ('{"timestamp": true}', 'event.timestamp of type int'),
        ('{"entity": []}', 'event.entity of type dict'),
        ('{"check": {"metadata": {"name": 7}}}', 'check.metadata.name'),
        ('{"entity": {"metadata": {"annotations": {"a": 1}}}}',
         "entity.metadata.annotations['a']"),
    ])
    def test_rejects_wrong_types(self, data, expected):
        with pytest.raises(UnmarshalError) as e:
            parse_event(data)
        assert expected in str(e.value)


class TestValidateEvent:

    def test_valid_event(self):
        assert validate_event(_valid_event()) is None

    def test_empty_annotations_are_valid(self):
        event = _valid_event(entity=Entity(name='e', annotations={}),
                             check=Check(name='c', annotations={}))
        validate_event(event)

    def test_missing_event(self):
        with pytest.raises(MissingEvent, match='^event is missing$'):
            validate_event(None)

    @pytest.mark.parametrize('timestamp', [0, -1])
    def test_timestamp_must_be_positive(self, timestamp):
        with pytest.raises(InvalidTimestamp) as e:
            validate_event(_valid_event(timestamp=timestamp))
        assert str(e.value) == 'timestamp is missing or must be greater than zero'

    def test_missing_entity(self):
        with pytest.raises(MissingEntity) as e:
            validate_event(_valid_event(entity=None))
        assert str(e.value) == 'entity is missing from event'

    def test_empty_entity_name(self):
        with pytest.raises(InvalidEntityName) as e:
            validate_event(_valid_event(entity=Entity(name='')))
        assert str(e.value) == 'entity name must not be empty'

    def test_missing_check(self):
        with pytest.raises(MissingCheck) as e:
            validate_event(_valid_event(check=None))
        assert str(e.value) == 'check is missing from event'

    def test_empty_check_name(self):
        with pytest.raises(InvalidCheckName) as e:
            validate_event(_valid_event(check=Check(name='')))
        assert str(e.value) == 'check name must not be empty'

    @pytest.mark.parametrize('overrides, error', [
        # timestamp is checked before everything else
        (dict(timestamp=0, entity=None, check=None), InvalidTimestamp),
        (dict(entity=None, check=None), MissingEntity),
        (dict(entity=Entity(name=''), check=None), InvalidEntityName),
        (dict(check=None), MissingCheck),
    ])
    def test_first_violation_wins(self, overrides, error):
        with pytest.raises(error):
            validate_event(_valid_event(**overrides))
