from unittest import TestCase
from nftledger import logger
import logging


class TestLogger(TestCase):
    def tearDown(self):
        logger.overwrite_logger_level(logging.INFO)

    def test_get_logger(self):
        log = logger.get_logger('Ledger')

        self.assertIsInstance(log, logging.Logger)
        self.assertEqual(log.name, 'Ledger')

    def test_notice_level(self):
        log = logger.get_logger('Ledger')

        self.assertEqual(logging.getLevelName(22), 'NOTICE')
        self.assertTrue(callable(log.notice))

        with self.assertLogs('Ledger', level='INFO') as cm:
            log.notice('hello')

        self.assertIn('NOTICE:Ledger:hello', cm.output)

    def test_overwrite_level(self):
        log = logger.get_logger('Ledger')
        logger.overwrite_logger_level(logging.ERROR)

        self.assertEqual(log.level, logging.ERROR)

    def test_negative_level_mocks(self):
        logger.overwrite_logger_level(-1)

        log = logger.get_logger('Quiet')

        self.assertIsInstance(log, logger.MockLogger)
        log.info('nothing happens')
        log.notice('still nothing')
