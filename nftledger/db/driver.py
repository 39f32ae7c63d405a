from nftledger.db.encoder import encode, decode
from nftledger.exceptions import DatabaseDriverNotFound
from nftledger.logger import get_logger
from nftledger import config
import pymongo
import re

# DB maps bytes to bytes
# Driver maps string to python object


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        key = item.encode()
        return decode(self.db.get(key))

    def set(self, key: str, value):
        k = key.encode()
        if value is None:
            self.__delitem__(key)
        else:
            self.db[k] = encode(value).encode()

    def delete(self, key: str):
        self.__delitem__(key)

    def iter(self, prefix: str):
        p = prefix.encode()
        return [k.decode() for k in sorted(self.db.keys()) if k.startswith(p)]

    def keys(self):
        return self.iter('')

    def flush(self):
        self.db.clear()

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        k = key.encode()
        try:
            del self.db[k]
        except KeyError:
            pass


class MongoDriver:
    # conn_str see https://www.mongodb.com/docs/manual/reference/connection-string/
    def __init__(self, host=config.DB_URL, port=config.DB_PORT, db=config.DB_NAME,
                 collection=config.DB_COLLECTION, client=None):
        self.client = client or pymongo.MongoClient(host=host, port=port,
                                                    serverSelectionTimeoutMS=config.DB_TIMEOUT_MS)
        self.db = self.client[db][collection]

    def get(self, item: str):
        v = self.db.find_one({'_id': item})
        if v is None:
            return None

        return decode(v['value'])

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
        else:
            self.db.update_one({'_id': key}, {'$set': {'value': encode(value)}}, upsert=True)

    def delete(self, key: str):
        self.db.delete_one({'_id': key})

    def iter(self, prefix: str):
        cur = self.db.find({'_id': {'$regex': '^{}'.format(re.escape(prefix))}}, projection=['_id'])
        cur = cur.sort('_id', pymongo.ASCENDING)

        return [entry['_id'] for entry in cur]

    def keys(self):
        return self.iter('')

    def flush(self):
        self.db.delete_many({})

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        self.delete(key)


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}  # L1 cache, uncommitted
        self.cache = {}  # L0 cache, mirrors the backing driver
        self.driver = driver if driver is not None else InMemDriver()
        self.log = get_logger('Driver')

    def find(self, key: str):
        # None in pending_writes is a pending delete, so membership is checked instead of the value
        if key in self.pending_writes:
            return self.pending_writes[key]

        if key in self.cache:
            return self.cache[key]

        value = self.driver.get(key)
        if value is not None:
            self.cache[key] = value

        return value

    def get(self, key: str):
        return self.find(key)

    def set(self, key, value):
        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def commit(self) -> dict:
        writes = dict(self.pending_writes)
        previous = {k: self.driver.get(k) for k in writes}
        applied = []

        try:
            for k, v in writes.items():
                self.driver.set(k, v)
                applied.append(k)
        except Exception:
            # Restore the keys this commit already wrote
            for k in applied:
                self.driver.set(k, previous[k])
            self.cache.clear()
            self.log.error('Commit failed after {} of {} writes'.format(len(applied), len(writes)))
            raise
        finally:
            self.pending_writes.clear()

        for k, v in writes.items():
            if v is None:
                self.cache.pop(k, None)
            else:
                self.cache[k] = v

        self.log.debug('Committed {} writes'.format(len(writes)))
        return writes

    def rollback(self):
        if self.pending_writes:
            self.log.debug('Rolled back {} pending writes'.format(len(self.pending_writes)))
        self.pending_writes.clear()

    def reset_cache(self):
        self.cache.clear()

    def clear_pending_state(self):
        self.rollback()
        self.reset_cache()


class LedgerDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR

    def items(self, prefix=''):
        # Layers are read top down, a key seen in an upper layer shadows the ones below it
        _items = {}
        keys = set()

        for layer in (self.pending_writes, self.cache):
            for k, v in layer.items():
                if k.startswith(prefix) and k not in keys:
                    keys.add(k)
                    if v is not None:
                        _items[k] = v

        for k in set(self.driver.iter(prefix=prefix)) - keys:
            v = self.get(k)
            if v is not None:
                _items[k] = v

        return _items

    def keys(self, prefix=''):
        return sorted(self.items(prefix).keys())

    def make_key(self, contract, variable, args=()):
        contract_variable = self.delimiter.join((contract, variable))
        if args:
            return config.DELIMITER.join((contract_variable, *[str(arg) for arg in args]))
        return contract_variable

    def get_contract_keys(self, name):
        return self.keys(name + self.delimiter)

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()


DRIVERS = {
    'memory': InMemDriver,
    'mongo': MongoDriver
}


def get_driver(name=config.DB_TYPE, **kwargs) -> LedgerDriver:
    driver_class = DRIVERS.get(name)

    if driver_class is None:
        raise DatabaseDriverNotFound(driver=name, known_drivers=sorted(DRIVERS.keys()))

    return LedgerDriver(driver=driver_class(**kwargs))
