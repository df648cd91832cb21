import dataclasses
from datetime import datetime, timezone

import pytest

from ticket_print_service.escpos import TicketEncoder, encode_ticket, format_timestamp
from ticket_print_service.models import PrintJob

INIT = b'\x1b\x40'
CUT = b'\x1d\x56\x00'


def _expected_ticket():
    return b''.join([
        b'\x1b\x40',
        b'\x1b\x61\x01',
        b'\x1b\x45\x01', b'\x1d\x21\x11',
        b'SISTEMA DE SENHAS\n',
        b'\x1b\x45\x00', b'\x1d\x21\x00',
        b'\n',
        'Categoria: Recepção\n'.encode('utf-8'),
        b'\n',
        b'\x1b\x45\x01', b'\x1d\x21\x22',
        b'A001\n',
        b'\x1d\x21\x00', b'\x1b\x45\x00',
        b'\n',
        b'01/01/2024, 10:00:00\n',
        b'\n\n',
        b'Aguarde ser chamado\n',
        b'\n\n\n',
        b'\x1d\x56\x00',
    ])


def test_encode_matches_byte_layout(job):
    assert encode_ticket(job, tz='UTC') == _expected_ticket()


def test_starts_with_init_and_ends_with_cut(job):
    for variant in (job, dataclasses.replace(job, is_priority=True),
                    dataclasses.replace(job, category_name='')):
        data = encode_ticket(variant, tz='UTC')
        assert data.startswith(INIT)
        assert data.endswith(CUT)


def test_category_prefix_does_not_change_output(job):
    other = dataclasses.replace(job, category_prefix='ZZZ')
    assert encode_ticket(job, tz='UTC') == encode_ticket(other, tz='UTC')


def test_priority_inserts_single_banner_segment(job):
    normal = encode_ticket(job, tz='UTC')
    priority = encode_ticket(dataclasses.replace(job, is_priority=True), tz='UTC')

    segment = (
        b'\x1b\x45\x01'
        + '*** ATENDIMENTO PRIORITÁRIO ***\n'.encode('utf-8')
        + b'\x1b\x45\x00'
        + b'\n'
    )
    assert TicketEncoder().priority_segment() == segment

    # Inserted right before the timestamp line
    position = normal.index(b'01/01/2024, 10:00:00\n')
    assert priority == normal[:position] + segment + normal[position:]


def test_encoding_is_deterministic(job):
    encoder = TicketEncoder('UTC')
    assert encoder.encode(job) == encoder.encode(job)


def test_text_is_utf8(job):
    data = encode_ticket(job, tz='UTC')
    assert 'Recepção'.encode('utf-8') in data
    assert 'Recepção'.encode('latin-1') not in data


def test_format_timestamp_utc():
    dt = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
    assert format_timestamp(dt, 'UTC') == '01/01/2024, 10:00:00'


def test_format_timestamp_naive_is_utc():
    assert format_timestamp(datetime(2024, 3, 9, 8, 5, 7), 'UTC') == '09/03/2024, 08:05:07'


def test_format_timestamp_local_timezone():
    zoneinfo = pytest.importorskip('zoneinfo')
    try:
        zoneinfo.ZoneInfo('America/Sao_Paulo')
    except zoneinfo.ZoneInfoNotFoundError:
        pytest.skip('timezone database not available')

    dt = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
    assert format_timestamp(dt, 'America/Sao_Paulo') == '01/01/2024, 07:00:00'


def test_empty_category_still_encodes():
    job = PrintJob(ticket_number='B002', category_name='',
                   timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert b'Categoria: \n' in encode_ticket(job, tz='UTC')
