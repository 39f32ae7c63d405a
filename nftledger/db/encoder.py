import json
from nftledger.stdlib.uint import UInt

##
# ENCODER CLASS
# Add to this to encode Python types for storage.
# UInts are kept as decimal strings since they can exceed the 8 byte integers MongoDB stores natively.
##


class Encoder(json.JSONEncoder):
    def default(self, o, *args):
        if isinstance(o, UInt):
            return {
                '__uint__': str(o)
            }
        return super().default(o)


# JSON library from Python 3 doesn't let you instantiate your custom Encoder. You have to pass it as an obj to json
def encode(data):
    return json.dumps(data, cls=Encoder, separators=(',', ':'))


def as_object(d):
    if '__uint__' in d:
        return UInt(d['__uint__'])
    return dict(d)


# Decode has a hook for JSON objects, which are just Python dictionaries. You have to specify the logic in this hook.
def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data, object_hook=as_object)
    except json.decoder.JSONDecodeError:
        return None
