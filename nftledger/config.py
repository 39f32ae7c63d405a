import os

DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024
MAX_ACCOUNT_SIZE = 256

# Balances and token IDs live in [0, 2 ** UINT_BITS)
UINT_BITS = 256
UINT_MAX = 2 ** UINT_BITS - 1

# Contract name doubles as the ledger's own address
LEDGER_CONTRACT = 'nft'
DEFAULT_SIGNER = 'sys'

NAME_VARIABLE = 'name'
SUPPLY_VARIABLE = 'supply'
OWNERS_HASH = 'owners'
BALANCES_HASH = 'balances'
APPROVALS_HASH = 'approvals'
OPERATORS_HASH = 'operators'
CONTROLLERS_HASH = 'controllers'

PRIVATE_METHOD_PREFIX = '_'
PRIVILEGED_FUNCTIONS = {'mint', 'burn'}

DB_TYPE = os.getenv('NFTLEDGER_DRIVER', 'memory')

DB_URL = os.getenv('NFTLEDGER_DB_URL', 'localhost')
DB_PORT = int(os.getenv('NFTLEDGER_DB_PORT', 27017))
DB_NAME = os.getenv('NFTLEDGER_DB_NAME', 'nftledger')
DB_COLLECTION = 'state'
DB_TIMEOUT_MS = 2000
