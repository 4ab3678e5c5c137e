#!/usr/bin/env python3
"""
Test Suite for the /api/products endpoints

Runs the Flask app against a temporary database with the test client.
"""

import base64
import shutil
import tempfile
import unittest

from product_analytics.app import create_app
from product_analytics.config import config
from product_analytics.utils.cache import TTLCache
from product_analytics.utils.database_utils import DatabaseManager


def basic_auth(username, password):
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {'Authorization': f'Basic {token}'}


class TestProductsAPI(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.app = create_app(db_manager=DatabaseManager(database_dir=self.test_dir), cache=TTLCache())
        self.app.config['TESTING'] = True
        self.client = self.app.test_client()
        self.headers = basic_auth(config.ADMIN_USERNAME, config.ADMIN_PASSWORD)

        response = self.client.post('/api/products/', json={
            'name': 'Ceramic Mug',
            'is_physical': True,
            'physical_costs': {
                'shipping': {'amount': 5, 'mode': 'fixed'},
                'production': {'amount': 10, 'mode': 'percentage'},
            }
        }, headers=self.headers)
        self.assertEqual(response.status_code, 201)
        self.product_id = response.get_json()['product']['id']

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def post_record(self, **payload):
        return self.client.post(f'/api/products/{self.product_id}/records', json=payload, headers=self.headers)

    def test_requires_auth(self):
        response = self.client.get('/api/products/')
        self.assertEqual(response.status_code, 401)

        response = self.client.get('/api/products/', headers=basic_auth(config.ADMIN_USERNAME, 'wrong'))
        self.assertEqual(response.status_code, 401)

    def test_list_products(self):
        self.post_record(date='2025-01-01', investment=100, revenue=150)

        data = self.client.get('/api/products/', headers=self.headers).get_json()
        self.assertTrue(data['success'])
        self.assertEqual(data['products'][0]['name'], 'Ceramic Mug')
        self.assertAlmostEqual(data['summaries'][0]['total_profit'], 50.0)

    def test_create_requires_name(self):
        response = self.client.post('/api/products/', json={'image': 'x'}, headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.get_json()['success'])

    def test_upsert_and_analysis(self):
        response = self.post_record(date='2025-01-01', investment=200, revenue=1000, sales=10)
        self.assertEqual(response.status_code, 200)
        self.assertAlmostEqual(response.get_json()['record']['profit'], 800.0)

        response = self.client.get(f'/api/products/{self.product_id}/analysis?period=all', headers=self.headers)
        self.assertEqual(response.status_code, 200)
        analysis = response.get_json()['analysis']
        # 50 shipping + 100 production on top of 200 ad spend
        self.assertAlmostEqual(analysis['stats']['investment'], 350.0)
        self.assertAlmostEqual(analysis['stats']['physical_costs'], 150.0)
        self.assertEqual(len(analysis['records']), 1)

    def test_analysis_custom_period(self):
        self.post_record(date='2025-01-01', investment=10, revenue=20)
        self.post_record(date='2025-01-15', investment=10, revenue=40)

        response = self.client.get(
            f'/api/products/{self.product_id}/analysis?period=custom&start=2025-01-10&end=2025-01-31',
            headers=self.headers
        )
        self.assertEqual(len(response.get_json()['analysis']['records']), 1)

    def test_invalid_dates(self):
        response = self.client.get(
            f'/api/products/{self.product_id}/analysis?period=custom&start=2025-13-01&end=2025-01-31',
            headers=self.headers
        )
        self.assertEqual(response.status_code, 400)

        response = self.client.get(
            f'/api/products/{self.product_id}/analysis?period=custom&start=2025-02-01&end=2025-01-31',
            headers=self.headers
        )
        self.assertEqual(response.status_code, 400)

        self.assertEqual(self.post_record(date='yesterday', investment=1).status_code, 400)
        self.assertEqual(self.post_record(investment=1).status_code, 400)

    def test_unknown_product(self):
        response = self.client.get('/api/products/missing/analysis', headers=self.headers)
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.get_json()['success'])

        response = self.client.post('/api/products/missing/records', json={'date': '2025-01-01'},
                                    headers=self.headers)
        self.assertEqual(response.status_code, 404)

    def test_update_physical_costs(self):
        self.post_record(date='2025-01-01', investment=200, revenue=1000, sales=10)
        url = f'/api/products/{self.product_id}/analysis'
        before = self.client.get(url, headers=self.headers).get_json()['analysis']
        self.assertAlmostEqual(before['stats']['physical_costs'], 150.0)

        response = self.client.put(f'/api/products/{self.product_id}/physical-costs', json={
            'is_physical': True,
            'physical_costs': {'shipping': {'amount': 2, 'mode': 'fixed'}},
        }, headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['product']['physical_costs']['shipping']['amount'], 2.0)

        after = self.client.get(url, headers=self.headers).get_json()['analysis']
        self.assertAlmostEqual(after['stats']['physical_costs'], 20.0)
        self.assertAlmostEqual(after['stats']['investment'], 220.0)

        self.client.put(f'/api/products/{self.product_id}/physical-costs',
                        json={'is_physical': False}, headers=self.headers)
        digital = self.client.get(url, headers=self.headers).get_json()['analysis']
        self.assertAlmostEqual(digital['stats']['physical_costs'], 0.0)
        self.assertAlmostEqual(digital['stats']['investment'], 200.0)

    def test_update_physical_costs_validation(self):
        url = f'/api/products/{self.product_id}/physical-costs'
        self.assertEqual(self.client.put(url, json={'physical_costs': {}}, headers=self.headers).status_code, 400)

        team_headers = basic_auth(config.TEAM_USERNAME, config.TEAM_PASSWORD)
        response = self.client.put(url, json={'is_physical': False}, headers=team_headers)
        self.assertEqual(response.status_code, 404)

    def test_portfolio(self):
        self.post_record(date='2025-01-01', investment=100, revenue=300)

        data = self.client.get('/api/products/portfolio', headers=self.headers).get_json()
        self.assertTrue(data['success'])
        self.assertAlmostEqual(data['portfolio']['total_profit'], 200.0)
        self.assertAlmostEqual(data['portfolio']['overall_roi'], 200.0)

    def test_export_csv(self):
        self.post_record(date='2025-01-02', investment=100.5, revenue=300)

        response = self.client.get(f'/api/products/{self.product_id}/export', headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.mimetype.startswith('text/csv'))
        lines = response.get_data(as_text=True).strip().splitlines()
        self.assertTrue(lines[0].startswith('Date;Investment;Revenue'))
        self.assertTrue(lines[1].startswith('02/01/2025;100,50;300,00'))

    def test_monthly(self):
        response = self.client.get('/api/products/monthly?months=3', headers=self.headers)
        data = response.get_json()
        self.assertTrue(data['success'])
        self.assertEqual(len(data['months']), 3)

        response = self.client.get('/api/products/monthly?months=abc', headers=self.headers)
        self.assertEqual(response.status_code, 400)

    def test_delete_product(self):
        response = self.client.delete(f'/api/products/{self.product_id}', headers=self.headers)
        self.assertEqual(response.status_code, 200)
        response = self.client.get(f'/api/products/{self.product_id}/analysis', headers=self.headers)
        self.assertEqual(response.status_code, 404)

    def test_products_are_per_user(self):
        team_headers = basic_auth(config.TEAM_USERNAME, config.TEAM_PASSWORD)
        response = self.client.get(f'/api/products/{self.product_id}/analysis', headers=team_headers)
        self.assertEqual(response.status_code, 404)


if __name__ == '__main__':
    unittest.main()
