import json

import pytest

from shelfscan import cli
from shelfscan.exceptions import FetchError
from shelfscan.models import FetchResult
from shelfscan.storage import JSONProductStore, SupplierStorage


@pytest.fixture
def workspace(mocker, tmp_path):
    def fake_init(storage_name='products'):
        path = tmp_path / '.shelfscan' / storage_name
        path.mkdir(parents=True, exist_ok=True)
        return path

    mocker.patch('shelfscan.storage.products.init_shelfscan', side_effect=fake_init)
    mocker.patch('shelfscan.storage.suppliers.init_shelfscan', side_effect=fake_init)
    mocker.patch('shelfscan.cli.setup_local_logging')
    mocker.patch('shelfscan.cli.setup_logfire')
    return tmp_path


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / 'suppliers.json'
    path.write_text(
        json.dumps(
            {
                'name': 'Coffee Co',
                'url': 'https://shop.example.com/catalog',
                'product_selector': 'li.product',
                'name_selector': '.name',
                'price_selector': '.price',
            }
        )
    )
    return path


@pytest.fixture
def fake_fetch(mocker, catalog_html):
    fetcher = mocker.MagicMock()
    fetcher.__enter__.return_value = fetcher
    fetcher.fetch.side_effect = lambda url: FetchResult(url=url, content=catalog_html.encode('utf-8'), encoding='utf-8')
    mocker.patch('shelfscan.core.pipeline.create_fetcher', return_value=fetcher)
    return fetcher


def test_run_writes_json_output(workspace, config_file, fake_fetch, tmp_path):
    output = tmp_path / 'result.json'

    code = cli.main(['run', '--config', str(config_file), '--output', str(output)])

    assert code == 0
    data = json.loads(output.read_text(encoding='utf-8'))
    assert data['status'] == 'completed'
    assert [p['price'] for p in data['products']] == ['19.99', None, '1299.50']


def test_add_then_run_stored_supplier_with_save(workspace, config_file, fake_fetch):
    assert cli.main(['add', '--config', str(config_file)]) == 0
    assert cli.main(['run', '--supplier-id', '1', '--save', '--format', 'markdown']) == 0

    captures = list((workspace / '.shelfscan' / 'products' / 'supplier_1').glob('capture_*.json'))
    assert len(captures) == 1
    assert cli.main(['products', '--supplier-id', '1']) == 0


def test_tick_captures_due_suppliers(workspace, config_file, fake_fetch):
    cli.main(['add', '--config', str(config_file)])

    assert cli.main(['tick']) == 0
    # Just captured, so nothing is due on the next tick
    assert cli.main(['tick']) == 0
    assert fake_fetch.fetch.call_count == 1


def test_invalid_config_exits_with_error(workspace, tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text(json.dumps({'url': 'not-a-url'}))

    assert cli.main(['run', '--config', str(path)]) == 1


def test_failed_run_exits_with_error(mocker, workspace, config_file):
    fetcher = mocker.MagicMock()
    fetcher.__enter__.return_value = fetcher
    fetcher.fetch.side_effect = FetchError('https://shop.example.com/catalog', 'HTTP 503', status_code=503)
    mocker.patch('shelfscan.core.pipeline.create_fetcher', return_value=fetcher)

    assert cli.main(['run', '--config', str(config_file)]) == 1


def test_tick_skips_corrupt_supplier(workspace, config_file, fake_fetch):
    cli.main(['add', '--config', str(config_file)])
    (workspace / '.shelfscan' / 'suppliers' / 'supplier_2.json').write_text('{"config": {"source_url": "x"}}')

    assert cli.main(['tick']) == 0
    assert fake_fetch.fetch.call_count == 1
    assert SupplierStorage().last_run(1) is not None


def test_tick_failure_leaves_supplier_due(mocker, workspace, config_file):
    fetcher = mocker.MagicMock()
    fetcher.__enter__.return_value = fetcher
    fetcher.fetch.side_effect = FetchError('https://shop.example.com/catalog', 'HTTP 503', status_code=503)
    mocker.patch('shelfscan.core.pipeline.create_fetcher', return_value=fetcher)
    cli.main(['add', '--config', str(config_file)])

    assert cli.main(['tick', '--retries', '1']) == 1

    assert SupplierStorage().last_run(1) is None
    assert not (workspace / '.shelfscan' / 'products' / 'supplier_1').exists()


def test_products_with_empty_capture(workspace, capsys):
    assert cli.main(['products', '--supplier-id', '1']) == 1
    assert 'No captures for supplier 1' in capsys.readouterr().out

    JSONProductStore().save([], 1)

    assert cli.main(['products', '--supplier-id', '1']) == 0
    assert 'has no products' in capsys.readouterr().out


def test_save_requires_stored_supplier(workspace, config_file):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(['run', '--config', str(config_file), '--save'])
    assert exc_info.value.code == 2


def test_run_with_retries_uses_backoff_retryer(mocker, workspace, config_file, fake_fetch):
    retry = mocker.patch('shelfscan.cli.run_with_retry', side_effect=lambda run, max_attempts: run())
    run_many = mocker.spy(cli.ExtractionOrchestrator, 'run_many')

    assert cli.main(['run', '--config', str(config_file), '--retries', '3']) == 0

    assert retry.call_args.kwargs['max_attempts'] == 3
    run_many.assert_not_called()
