#!/usr/bin/env python3
"""
Test Suite for the TTL cache and the background refresh worker
"""

import unittest

from product_analytics.auth import SessionService
from product_analytics.background_worker import RefreshWorker
from product_analytics.utils.cache import TTLCache


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestTTLCache(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.cache = TTLCache(default_ttl_seconds=300, clock=self.clock)

    def test_get_and_set(self):
        self.cache.set('product:1', {'name': 'Mug'})
        self.assertEqual(self.cache.get('product:1'), {'name': 'Mug'})
        self.assertTrue(self.cache.has('product:1'))
        self.assertIsNone(self.cache.get('product:2'))
        self.assertEqual(self.cache.get('product:2', 'missing'), 'missing')

    def test_expiry_checked_on_read(self):
        self.cache.set('product:1', 'value')
        self.clock.advance(300)
        self.assertEqual(self.cache.get('product:1'), 'value')
        self.clock.advance(1)
        self.assertIsNone(self.cache.get('product:1'))
        self.assertEqual(len(self.cache), 0)

    def test_custom_ttl(self):
        self.cache.set('short', 'value', ttl_seconds=10)
        self.clock.advance(11)
        self.assertFalse(self.cache.has('short'))

    def test_invalidate(self):
        self.cache.set('product:1', 'a')
        self.cache.set('product:2', 'b')
        self.cache.set('products:user', ['1', '2'])

        self.cache.invalidate('product:1')
        self.assertIsNone(self.cache.get('product:1'))
        self.assertEqual(self.cache.invalidate_prefix('products:'), 1)
        self.assertEqual(len(self.cache), 1)

        self.cache.clear()
        self.assertEqual(len(self.cache), 0)


class TestRefreshWorker(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.cache = TTLCache(clock=self.clock)
        self.session = SessionService(user_id='admin', ttl_seconds=60, clock=self.clock)
        self.worker = RefreshWorker(self.cache, self.session, interval_seconds=30)

    def test_tick_refreshes_valid_session_and_clears_cache(self):
        self.cache.set('product:1', 'records')
        self.clock.advance(50)

        self.assertTrue(self.worker.run_once())
        self.assertEqual(len(self.cache), 0)

        self.clock.advance(50)
        self.assertTrue(self.session.is_session_valid())

    def test_tick_with_expired_session(self):
        self.clock.advance(61)
        self.cache.set('product:1', 'records')

        self.assertFalse(self.worker.run_once())
        self.assertEqual(len(self.cache), 0)
        self.assertIsNone(self.session.get_current_user())

    def test_start_and_stop(self):
        self.worker.start()
        self.assertTrue(self.worker.running)
        self.worker.stop(timeout=5)
        self.assertFalse(self.worker.running)


if __name__ == '__main__':
    unittest.main()
