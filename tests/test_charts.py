"""
Test suite for the charts view and AI forecast endpoint.
"""

from models import AiForecast, ForecastAlert


class TestChartsView:
    """Summary cards and chart series."""

    def test_requires_auth(self, client):
        assert client.get('/charts/').status_code == 302

    def test_renders_series(self, logged_in_client):
        response = logged_in_client.get('/charts/')

        assert response.status_code == 200
        assert 'Alimentação'.encode() in response.data or b'Alimenta\\u00e7\\u00e3o' in response.data
        assert b'"Out"' in response.data
        assert b'categoryChart' in response.data

    def test_no_expenses_message(self, logged_in_client, app_no_csrf):
        from storage_service import KEYS
        from tests.conftest import DEVICE_ID
        app_no_csrf.kv_store.set_item(DEVICE_ID, KEYS['TRANSACTIONS'], '[]')

        response = logged_in_client.get('/charts/')
        assert b'Sem despesas registradas' in response.data


class TestForecast:
    """AI forecast JSON endpoint."""

    def test_forecast_success(self, logged_in_client, ai):
        ai.generate_financial_forecast.return_value = AiForecast(
            predicted_total_next_month=1100.0,
            risk_level='Médio',
            alerts=[ForecastAlert(title='Lazer', message='Gasto alto com lazer', severity='warning')],
            suggestions=['Cozinhe em casa'],
        )

        response = logged_in_client.post('/charts/forecast')

        assert response.status_code == 200
        data = response.get_json()
        assert data['predicted_total_next_month'] == 1100.0
        assert data['risk_level'] == 'Médio'
        assert data['alerts'][0]['severity'] == 'warning'
        transactions = ai.generate_financial_forecast.call_args[0][0]
        assert len(transactions) == 5

    def test_forecast_failure(self, logged_in_client, ai):
        ai.generate_financial_forecast.return_value = None

        response = logged_in_client.post('/charts/forecast')

        assert response.status_code == 502
        assert 'error' in response.get_json()

    def test_forecast_get_not_allowed(self, logged_in_client):
        assert logged_in_client.get('/charts/forecast').status_code == 405
