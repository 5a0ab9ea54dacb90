# Copyright (C) 2012-2018 The python-netparams developers
#
# This file is part of python-netparams.
#
# It is subject to the license terms in the LICENSE file found in the top-level
# directory of this distribution.
#
# No part of python-netparams, including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

import logging
import types

import netparams.core
from netparams.registry import (
    NetworkRegistry,
    NetParamsError,
    DuplicateNetworkError,
    UnknownHDKeyIDError,
    UnknownNetworkError,
)

# Note that setup.py can break if __init__.py imports any external
# dependencies, as these might not be installed when setup.py runs. In this
# case __version__ could be moved to a separate version.py and imported here.
__version__ = '0.1.0dev'

log = logging.getLogger(__name__)

_BASE58_PREFIX_KEYS = ('PUBKEY_ADDR', 'SCRIPT_ADDR', 'SECRET_KEY', 'WITNESS_PUBKEY_ADDR', 'WITNESS_SCRIPT_ADDR')
_BIP32_PREFIX_KEYS = ('PRIVATE_KEY', 'PUBLIC_KEY')


class ChainParams(netparams.core.CoreChainParams):
    """Parameters of a network

    The built-in networks are subclasses that set class attributes. A custom
    network can be declared the same way, or built directly by passing any
    attribute as a keyword argument:

        ChainParams(NAME='privnet', MESSAGE_START=b'\\x00\\x00\\x00\\x01', ...)

    Instances can't be modified once constructed.
    """
    # Magic bytes at the start of every message, also used as the identity
    # of the network
    MESSAGE_START = None
    DEFAULT_PORT = None
    DNS_SEEDS = ()

    # First byte of base58-encoded addresses and keys
    BASE58_PREFIXES = None

    # BIP32 extended key magics
    BIP32_PREFIXES = None

    # BIP173 human-readable part of segwit addresses
    BECH32_HRP = None

    # BIP44 coin type
    HD_COIN_TYPE = None

    RELAY_NON_STD_TXS = False
    CHARITY_PUBKEY = None

    def __init__(self, **kwargs):
        attrs = {}
        for name in dir(self.__class__):
            if name.isupper():
                attrs[name] = getattr(self.__class__, name)
        for name, value in kwargs.items():
            if name not in attrs:
                raise TypeError('%s: unknown parameter %r' % (self.__class__.__name__, name))
            attrs[name] = value

        for name, value in self._check(attrs).items():
            object.__setattr__(self, name, value)

    @classmethod
    def _check(cls, attrs):
        name = attrs['NAME']
        if not name:
            raise ValueError('ChainParams: NAME must be set')

        start = attrs['MESSAGE_START']
        if start is None or len(start) != 4:
            raise ValueError('%s: MESSAGE_START must be exactly 4 bytes; got %r' % (name, start))
        attrs['MESSAGE_START'] = bytes(start)

        prefixes = dict(attrs['BASE58_PREFIXES'] or {})
        for key in _BASE58_PREFIX_KEYS:
            if not (0 <= prefixes.get(key, -1) <= 0xff):
                raise ValueError('%s: BASE58_PREFIXES[%r] must be in range 0x0 to 0xff; got %r' %
                                 (name, key, prefixes.get(key)))
        attrs['BASE58_PREFIXES'] = types.MappingProxyType(prefixes)

        prefixes = dict(attrs['BIP32_PREFIXES'] or {})
        for key in _BIP32_PREFIX_KEYS:
            if prefixes.get(key) is None or len(prefixes[key]) != 4:
                raise ValueError('%s: BIP32_PREFIXES[%r] must be exactly 4 bytes; got %r' %
                                 (name, key, prefixes.get(key)))
            prefixes[key] = bytes(prefixes[key])
        attrs['BIP32_PREFIXES'] = types.MappingProxyType(prefixes)

        if not attrs['BECH32_HRP'] or not isinstance(attrs['BECH32_HRP'], str):
            raise ValueError('%s: BECH32_HRP must be a non-empty str; got %r' % (name, attrs['BECH32_HRP']))
        attrs['BECH32_HRP'] = attrs['BECH32_HRP'].lower()

        attrs['DEPLOYMENTS'] = netparams.core.freeze_deployments(attrs['DEPLOYMENTS'] or {})
        attrs['CHECKPOINTS'] = tuple(attrs['CHECKPOINTS'])
        attrs['DNS_SEEDS'] = tuple(attrs['DNS_SEEDS'])
        return attrs

    def __setattr__(self, name, value):
        raise AttributeError('%s is immutable' % self.__class__.__name__)

    def __delattr__(self, name):
        raise AttributeError('%s is immutable' % self.__class__.__name__)

    def __repr__(self):
        return '%s(NAME=%r, MESSAGE_START=%r)' % (self.__class__.__name__, self.NAME, self.MESSAGE_START)


class MainParams(ChainParams, netparams.core.CoreMainParams):
    MESSAGE_START = b'\xfb\xc0\xb6\xdb'
    DEFAULT_PORT = 41888
    DNS_SEEDS = ()
    BASE58_PREFIXES = {'PUBKEY_ADDR':0x32,          # starts with E
                       'SCRIPT_ADDR':0x30,          # starts with P
                       'SECRET_KEY' :0xef,          # starts with 6 or T
                       'WITNESS_PUBKEY_ADDR':0x06,  # starts with p2
                       'WITNESS_SCRIPT_ADDR':0x0a}  # starts with 7Xh
    BIP32_PREFIXES = {'PRIVATE_KEY':b'\x04\x88\xad\xe4',  # xprv
                      'PUBLIC_KEY' :b'\x04\x88\xb2\x1e'}  # xpub
    BECH32_HRP = 'mil'
    HD_COIN_TYPE = 2

class TestNet4Params(ChainParams, netparams.core.CoreTestNet4Params):
    MESSAGE_START = b'\xfd\xd2\xc8\xf1'
    DEFAULT_PORT = 31878
    DNS_SEEDS = ()
    BASE58_PREFIXES = {'PUBKEY_ADDR':0x6f,          # starts with m or n
                       'SCRIPT_ADDR':0xc4,          # starts with 2
                       'SECRET_KEY' :0xef,          # starts with 9 or c
                       'WITNESS_PUBKEY_ADDR':0x52,  # starts with QW
                       'WITNESS_SCRIPT_ADDR':0x31}  # starts with T7n
    BIP32_PREFIXES = {'PRIVATE_KEY':b'\x04\x35\x83\x94',  # tprv
                      'PUBLIC_KEY' :b'\x04\x35\x87\xcf'}  # tpub
    BECH32_HRP = 'temc2'
    HD_COIN_TYPE = 1
    RELAY_NON_STD_TXS = True

class RegTestParams(ChainParams, netparams.core.CoreRegTestParams):
    MESSAGE_START = b'\xfa\xbf\xb5\xda'
    DEFAULT_PORT = 31880
    DNS_SEEDS = ()
    BASE58_PREFIXES = {'PUBKEY_ADDR':0x6f,          # starts with m or n
                       'SCRIPT_ADDR':0xc4,          # starts with 2
                       'SECRET_KEY' :0xef,          # starts with 9 or c
                       'WITNESS_PUBKEY_ADDR':0x31,  # starts with QR
                       'WITNESS_SCRIPT_ADDR':0x3a}  # starts with T7n
    BIP32_PREFIXES = {'PRIVATE_KEY':b'\x04\x35\x83\x94',  # tprv
                      'PUBLIC_KEY' :b'\x04\x35\x87\xcf'}  # tpub
    BECH32_HRP = 'remc2'
    HD_COIN_TYPE = 1
    RELAY_NON_STD_TXS = True
    CHARITY_PUBKEY = '0377ba3117d776b40b49a910e869cd32adee4d33578f7bf52e1879ea739c9796ca'

class SimNetParams(ChainParams, netparams.core.CoreSimNetParams):
    MESSAGE_START = b'\x16\x1c\x14\x12'
    DEFAULT_PORT = 18555
    DNS_SEEDS = () # there must not be any seeds
    BASE58_PREFIXES = {'PUBKEY_ADDR':0x3f,          # starts with S
                       'SCRIPT_ADDR':0x7b,          # starts with s
                       'SECRET_KEY' :0x64,          # starts with 4 or F
                       'WITNESS_PUBKEY_ADDR':0x19,  # starts with Gg
                       'WITNESS_SCRIPT_ADDR':0x28}
    BIP32_PREFIXES = {'PRIVATE_KEY':b'\x04\x20\xb9\x00',  # sprv
                      'PUBLIC_KEY' :b'\x04\x20\xbd\x3a'}  # spub
    BECH32_HRP = 'sltc'
    HD_COIN_TYPE = 115 # ASCII for s
    RELAY_NON_STD_TXS = True


"""Registry of every network known to this process

Filled with the built-in networks on import. Applications register their own
networks with Register() as early as possible.
"""
default_registry = NetworkRegistry()

for _params in (MainParams(), TestNet4Params(), RegTestParams(), SimNetParams()):
    default_registry.must_register(_params)
del _params

def Register(params):
    """Register the parameters of a custom network

    Raises DuplicateNetworkError if a network with the same MESSAGE_START,
    including any of the built-in ones, is already registered.
    """
    default_registry.register(params)

def IsPubKeyHashAddrID(id):
    """Return True if id prefixes pay-to-pubkey-hash addresses on any network"""
    return default_registry.is_pubkey_hash_addr_id(id)

def IsScriptHashAddrID(id):
    """Return True if id prefixes pay-to-script-hash addresses on any network"""
    return default_registry.is_script_hash_addr_id(id)

def IsBech32SegwitPrefix(prefix):
    """Return True if prefix, including the '1', starts segwit addresses on any network"""
    return default_registry.is_bech32_segwit_prefix(prefix)

def HDPrivateKeyToPublicKeyID(id):
    """Return the public HD key id for a private one

    Raises UnknownHDKeyIDError
    """
    return default_registry.hd_private_key_to_public_key_id(id)

def ParamsForNet(net):
    """Return the registered parameters for the MESSAGE_START net"""
    return default_registry.lookup_net(net)

def ParamsForName(name):
    """Return the registered parameters called name"""
    return default_registry.lookup_name(name)


_NAME_ALIASES = {'testnet': 'testnet4',
                 'regnet': 'regtest'}

"""Master global setting for what chain params we're using.

However, don't set this directly, use SelectParams() instead so as to set the
netparams.core.coreparams correctly too.
"""
params = default_registry.lookup_name('mainnet')
netparams.core._SelectCoreParams(params)

def SelectParams(name):
    """Select the chain parameters to use

    name is one of 'mainnet', 'testnet4', 'regtest', 'simnet' or the name of
    any registered network. 'testnet' and 'regnet' are accepted as aliases.

    Default chain is 'mainnet'
    """
    global params
    try:
        selected = default_registry.lookup_name(_NAME_ALIASES.get(name, name))
    except UnknownNetworkError:
        raise ValueError('Unknown chain %r' % name)

    netparams.core._SelectCoreParams(selected)
    params = selected
    log.debug('Selected chain %s', selected.NAME)
