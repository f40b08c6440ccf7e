from decimal import Decimal

import pytest

from shelfscan.core.extraction import FieldExtractor
from shelfscan.exceptions import ParseError
from shelfscan.models import SupplierConfig


@pytest.fixture
def extractor():
    return FieldExtractor()


def test_extracts_one_record_per_list_element(extractor, catalog_html, supplier_config):
    outcome = extractor.extract(catalog_html.encode('utf-8'), supplier_config)

    assert outcome.matched_count == 3
    assert len(outcome.records) == 3

    first, second, third = outcome.records
    assert first.name == 'Espresso Beans 1kg'
    assert first.price == Decimal('19.99')
    assert first.promotion == '-10%'
    assert first.availability == 'In stock'

    assert third.name == 'Grinder Pro'
    assert third.price == Decimal('1299.50')


def test_missing_price_only_affects_that_field(extractor, catalog_html, supplier_config):
    outcome = extractor.extract(catalog_html.encode('utf-8'), supplier_config)
    second = outcome.records[1]

    assert second.price is None
    assert second.name == 'Filter Papers'
    assert second.promotion == ''
    assert second.availability == 'Out of stock'


def test_field_selectors_are_scoped_to_the_list_element(extractor, catalog_html, supplier_config):
    # The <aside> price outside any product must never leak into a record
    outcome = extractor.extract(catalog_html.encode('utf-8'), supplier_config)
    assert Decimal('999') not in [record.price for record in outcome.records]


def test_records_follow_document_order(extractor):
    items = ''.join(f'<div class="item"><b>item {i}</b></div>' for i in range(10))
    config = SupplierConfig.create(url='https://example.com', list_selector='div.item', name_selector='b')

    outcome = extractor.extract(f'<html><body>{items}</body></html>'.encode(), config)

    assert [record.name for record in outcome.records] == [f'item {i}' for i in range(10)]


def test_unconfigured_fields_default_to_empty(extractor, catalog_html):
    config = SupplierConfig.create(url='https://example.com', list_selector='li.product')

    outcome = extractor.extract(catalog_html.encode('utf-8'), config)

    assert outcome.matched_count == 3
    for record in outcome.records:
        assert record.name == ''
        assert record.price is None
        assert record.promotion == ''
        assert record.availability == ''


def test_zero_matches_is_not_an_error(extractor, catalog_html):
    config = SupplierConfig.create(url='https://example.com', list_selector='div.does-not-exist')

    outcome = extractor.extract(catalog_html.encode('utf-8'), config)

    assert outcome.matched_count == 0
    assert outcome.records == ()


def test_multiple_field_matches_are_concatenated(extractor):
    html = '<div class="p"><span class="n">Big</span> <span class="n">Box</span></div>'
    config = SupplierConfig.create(url='https://example.com', list_selector='div.p', name_selector='span.n')

    outcome = extractor.extract(html.encode(), config)

    assert outcome.records[0].name == 'BigBox'


def test_malformed_markup_is_tolerated(extractor):
    html = '<ul><li class=p><i>First</i><li class=p><i>Second</i></ul>'
    config = SupplierConfig.create(url='https://example.com', list_selector='li.p', name_selector='i')

    outcome = extractor.extract(html.encode(), config)

    assert outcome.matched_count == 2
    assert outcome.records[0].name == 'First'
    assert outcome.records[1].name == 'Second'


def test_unparsable_document_raises_parse_error(extractor, supplier_config):
    with pytest.raises(ParseError):
        extractor.extract(b'{"products": []}', supplier_config)


def test_injected_parser_is_used(mocker, supplier_config):
    document = mocker.Mock()
    document.query_all.side_effect = lambda selector, scope=None: ['elem'] if scope is None else ['match']
    document.text.return_value = ' 5,00 '
    parser = mocker.Mock()
    parser.parse.return_value = document

    outcome = FieldExtractor(parser=parser).extract(b'<p>ignored</p>', supplier_config)

    parser.parse.assert_called_once_with(b'<p>ignored</p>', None)
    assert outcome.matched_count == 1
    assert outcome.records[0].price == Decimal('5.00')
    assert outcome.records[0].name == '5,00'
