from datetime import datetime

import pytest
from pydantic import ValidationError

from shelfscan.exceptions import ConfigError
from shelfscan.models import ProductRecord, Schedule, SupplierConfig


def test_create_accepts_legacy_field_names():
    config = SupplierConfig.create(url='https://example.com/shop', product_selector='.item', type='http')

    assert config.source_url == 'https://example.com/shop'
    assert config.list_selector == '.item'
    assert config.source_type == 'HTTP'
    assert config.field_selectors() == {'name': None, 'price': None, 'promotion': None, 'availability': None}


def test_missing_list_selector_is_rejected():
    with pytest.raises(ConfigError) as exc_info:
        SupplierConfig.create(url='https://example.com')
    assert 'list_selector' in exc_info.value.fields


def test_blank_list_selector_is_rejected():
    with pytest.raises(ConfigError):
        SupplierConfig.create(url='https://example.com', list_selector='   ')


@pytest.mark.parametrize('url', ['example.com/shop', '/relative/path', 'not a url', ''])
def test_non_absolute_url_is_rejected(url):
    with pytest.raises(ConfigError) as exc_info:
        SupplierConfig.create(url=url, list_selector='.item')
    assert 'source_url' in exc_info.value.fields


def test_url_scheme_must_match_source_type():
    with pytest.raises(ConfigError):
        SupplierConfig.create(url='ftp://files.example.com/feed.xml', list_selector='item', source_type='HTTP')

    config = SupplierConfig.create(url='ftp://files.example.com/feed.xml', list_selector='item', source_type='FTP')
    assert config.source_type == 'FTP'


def test_constructor_checks_scheme_against_source_type():
    with pytest.raises(ConfigError) as exc_info:
        SupplierConfig(source_url='ftp://files.example.com/feed', list_selector='li')
    assert exc_info.value.fields == ['source_url']


def test_constructor_raises_config_error():
    with pytest.raises(ConfigError) as exc_info:
        SupplierConfig(source_url='not a url', list_selector='li')
    assert 'source_url' in exc_info.value.fields

    with pytest.raises(ConfigError) as exc_info:
        SupplierConfig.model_validate({'source_url': 'https://example.com', 'list_selector': 'li[', 'price_selector': ''})
    assert exc_info.value.fields == ['list_selector']


def test_invalid_css_selector_is_rejected():
    with pytest.raises(ConfigError) as exc_info:
        SupplierConfig.create(url='https://example.com', list_selector='.item', price_selector='span[')
    assert 'price_selector' in exc_info.value.fields


def test_blank_field_selectors_mean_absent():
    config = SupplierConfig.create(url='https://example.com', list_selector='.item', name_selector='  ')
    assert config.name_selector is None


def test_password_is_masked():
    config = SupplierConfig.create(url='https://example.com', list_selector='.item', password='hunter2')

    assert 'hunter2' not in repr(config)
    assert config.password.get_secret_value() == 'hunter2'


def test_config_is_immutable(supplier_config):
    with pytest.raises(ValidationError):
        supplier_config.list_selector = 'div'


def test_product_record_defaults():
    record = ProductRecord()
    assert record.name == ''
    assert record.price is None
    assert record.promotion == ''
    assert record.availability == ''


def test_daily_schedule_next_run():
    schedule = Schedule(kind='daily', hour=6)

    assert schedule.next_run(datetime(2024, 5, 1, 5, 0)) == datetime(2024, 5, 1, 6, 0)
    assert schedule.next_run(datetime(2024, 5, 1, 6, 0)) == datetime(2024, 5, 2, 6, 0)


def test_weekly_schedule_next_run():
    # 2024-05-01 is a Wednesday
    schedule = Schedule(kind='weekly', day=0, hour=9)

    assert schedule.next_run(datetime(2024, 5, 1, 12, 0)) == datetime(2024, 5, 6, 9, 0)
    assert schedule.next_run(datetime(2024, 5, 6, 8, 0)) == datetime(2024, 5, 6, 9, 0)
    assert schedule.next_run(datetime(2024, 5, 6, 9, 30)) == datetime(2024, 5, 13, 9, 0)


def test_weekly_schedule_needs_day():
    with pytest.raises(ValueError):
        Schedule(kind='weekly', hour=3)


def test_schedule_in_supplier_config_is_validated():
    with pytest.raises(ConfigError):
        SupplierConfig.create(url='https://example.com', list_selector='.item', schedule={'kind': 'daily', 'hour': 25})


def test_is_due():
    schedule = Schedule(kind='daily', hour=6)
    now = datetime(2024, 5, 2, 7, 0)

    assert schedule.is_due(None, now)
    assert schedule.is_due(datetime(2024, 5, 1, 6, 5), now)
    assert not schedule.is_due(datetime(2024, 5, 2, 6, 5), now)


def test_flat_schedule_columns_are_folded():
    config = SupplierConfig.create(
        url='https://example.com',
        product_selector='.item',
        schedule_type='weekly',
        schedule_day=4,
        schedule_hour=22,
    )
    assert config.schedule == Schedule(kind='weekly', day=4, hour=22)
