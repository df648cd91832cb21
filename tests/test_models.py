from datetime import datetime, timezone, timedelta

import pytest

from ticket_print_service.models import (
    PrintJob, InvalidPrintJob, PrinterConfig, InvalidPrinterConfig,
)


# =============================================================================
# PrintJob
# =============================================================================

def test_from_dict(job_data):
    job = PrintJob.from_dict(job_data)
    assert job.ticket_number == 'A001'
    assert job.category_name == 'Recepção'
    assert job.category_prefix == 'A'
    assert job.is_priority is False
    assert job.timestamp == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_optional_fields_default(job_data):
    del job_data['categoryPrefix']
    del job_data['isPriority']
    job = PrintJob.from_dict(job_data)
    assert job.category_prefix == ''
    assert job.is_priority is False


def test_timestamp_with_offset(job_data):
    job_data['timestamp'] = '2024-01-01T07:00:00-03:00'
    job = PrintJob.from_dict(job_data)
    assert job.timestamp.utcoffset() == timedelta(hours=-3)
    assert job.timestamp == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_naive_timestamp_is_utc(job_data):
    job_data['timestamp'] = '2024-01-01T10:00:00'
    assert PrintJob.from_dict(job_data).timestamp.tzinfo == timezone.utc


def test_fractional_seconds(job_data):
    job_data['timestamp'] = '2024-01-01T10:00:00.123Z'
    assert PrintJob.from_dict(job_data).timestamp.microsecond == 123000


@pytest.mark.parametrize('field', ['ticketNumber', 'categoryName', 'timestamp'])
def test_missing_required_field(job_data, field):
    del job_data[field]
    with pytest.raises(InvalidPrintJob, match=field):
        PrintJob.from_dict(job_data)


@pytest.mark.parametrize('field,value', [
    ('ticketNumber', 1),
    ('ticketNumber', ''),
    ('categoryName', ['x']),
    ('categoryPrefix', 3),
    ('isPriority', 'yes'),
    ('timestamp', 1704103200),
    ('timestamp', 'yesterday'),
    ('ticketNumber', 'A\ud800'),
    ('categoryName', 'Caixa \udfff'),
    ('timestamp', '0001-01-01T00:00:00+01:00'),
    ('timestamp', '9999-12-31T23:59:59-01:00'),
])
def test_invalid_field(job_data, field, value):
    job_data[field] = value
    with pytest.raises(InvalidPrintJob, match=field):
        PrintJob.from_dict(job_data)


def test_control_characters_rejected(job_data):
    job_data['categoryName'] = 'Caixa\x1d\x56\x00'
    with pytest.raises(InvalidPrintJob, match='control characters'):
        PrintJob.from_dict(job_data)


def test_body_must_be_object():
    with pytest.raises(InvalidPrintJob):
        PrintJob.from_dict(['A001'])


def test_invalid_print_job_is_value_error():
    assert issubclass(InvalidPrintJob, ValueError)


def test_to_dict_round_trip(job_data):
    job = PrintJob.from_dict(job_data)
    assert PrintJob.from_dict(job.to_dict()) == job


def test_job_is_immutable(job):
    with pytest.raises(AttributeError):
        job.ticket_number = 'B001'


# =============================================================================
# PrinterConfig
# =============================================================================

@pytest.mark.parametrize('value', [None, {}])
def test_absent_config_is_disabled(value):
    printer = PrinterConfig.from_dict(value)
    assert printer.enabled is False
    assert printer.port == 9100
    assert printer.is_network_ready is False


def test_port_defaults_to_9100():
    printer = PrinterConfig.from_dict({'enabled': True, 'ip': '10.0.0.5'})
    assert printer.port == 9100
    assert printer.url == 'http://10.0.0.5:9100'
    assert printer.is_network_ready is True


def test_enabled_without_ip_is_not_ready():
    assert PrinterConfig.from_dict({'enabled': True, 'ip': '  '}).is_network_ready is False


def test_full_config():
    printer = PrinterConfig.from_dict({
        'enabled': True, 'ip': '10.0.0.5', 'port': 9101,
        'transport': 'socket', 'timeout': 3,
    })
    assert printer.transport == 'socket'
    assert printer.timeout == 3.0
    assert printer.to_dict() == {
        'enabled': True, 'ip': '10.0.0.5', 'port': 9101,
        'transport': 'socket', 'timeout': 3.0,
    }


@pytest.mark.parametrize('value', [
    'enabled',
    {'enabled': 'true'},
    {'port': '9100'},
    {'port': 0},
    {'port': 70000},
    {'ip': 10},
    {'transport': 'usb'},
    {'timeout': -1},
])
def test_invalid_config(value):
    with pytest.raises(InvalidPrinterConfig):
        PrinterConfig.from_dict(value)


def test_ipv6_url_is_bracketed():
    printer = PrinterConfig.from_dict({'enabled': True, 'ip': 'fd00::5', 'port': 9100})
    assert printer.url == 'http://[fd00::5]:9100'
