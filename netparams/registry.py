# Copyright (C) 2018 The python-netparams developers
#
# This file is part of python-netparams.
#
# It is subject to the license terms in the LICENSE file found in the top-level
# directory of this distribution.
#
# No part of python-netparams, including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

"""Registry of known networks

Address and extended key parsers use a registry to decide whether a version
byte, Bech32 prefix or HD key magic belongs to any known network before
attempting a full decode.

Networks are registered as early as possible, normally while the application
starts up. Registration and lookups may still overlap: every registration
builds a new index and publishes it with a single assignment, so a lookup sees
either all of a registration or none of it.
"""

import collections
import logging
import threading

log = logging.getLogger(__name__)


class NetParamsError(Exception):
    """Base class for all network parameter errors"""

class DuplicateNetworkError(NetParamsError):
    """Raised when registering a network whose magic is already registered

    Retrying with the same parameters will always fail again.
    """

class UnknownHDKeyIDError(NetParamsError):
    """Raised when HD private extended key bytes don't belong to any network

    Callers should treat this as "not a recognized network", not as an
    internal fault.
    """

class UnknownNetworkError(NetParamsError, ValueError):
    """Raised when looking up a network that was never registered"""


_Index = collections.namedtuple('_Index', ['nets',
                                           'pubkey_hash_addr_ids',
                                           'script_hash_addr_ids',
                                           'bech32_segwit_prefixes',
                                           'hd_priv_to_pub_ids'])

_EMPTY_INDEX = _Index(collections.OrderedDict(), frozenset(), frozenset(), frozenset(), {})


class NetworkRegistry(object):
    """The set of networks known to an application

    An application normally owns exactly one registry;
    netparams.default_registry is the one the library fills with the built-in
    networks. Tests create their own so they don't interfere with each other.

    A registry only grows: there is no way to unregister a network.
    """

    def __init__(self):
        self._index = _EMPTY_INDEX
        self._write_lock = threading.Lock()

    def register(self, params):
        """Register the parameters of a network

        Raises DuplicateNetworkError if params.MESSAGE_START is already
        registered, in which case the registry is left untouched.

        Several networks may share address version bytes. The HD private key
        magic of the most recent registration replaces any earlier mapping for
        the same magic.
        """
        # Imported here as the package imports this module
        from netparams import ChainParams
        if not isinstance(params, ChainParams):
            raise TypeError('Expected ChainParams instance; got %r' % params)

        net = params.MESSAGE_START
        hd_priv = params.BIP32_PREFIXES['PRIVATE_KEY']
        hd_pub = params.BIP32_PREFIXES['PUBLIC_KEY']

        with self._write_lock:
            index = self._index
            if net in index.nets:
                raise DuplicateNetworkError('Duplicate network %s: magic %s already registered by %s' %
                                            (params.NAME, net.hex(), index.nets[net].NAME))

            prev_pub = index.hd_priv_to_pub_ids.get(hd_priv)
            if prev_pub is not None and prev_pub != hd_pub:
                log.warning('HD private key id %s of network %s now maps to %s instead of %s',
                            hd_priv.hex(), params.NAME, hd_pub.hex(), prev_pub.hex())

            nets = collections.OrderedDict(index.nets)
            nets[net] = params
            hd_priv_to_pub_ids = dict(index.hd_priv_to_pub_ids)
            hd_priv_to_pub_ids[hd_priv] = hd_pub

            # A Bech32 segwit address always starts with the human-readable
            # part followed by '1'
            self._index = _Index(nets,
                                 index.pubkey_hash_addr_ids | {params.BASE58_PREFIXES['PUBKEY_ADDR']},
                                 index.script_hash_addr_ids | {params.BASE58_PREFIXES['SCRIPT_ADDR']},
                                 index.bech32_segwit_prefixes | {params.BECH32_HRP.lower() + '1'},
                                 hd_priv_to_pub_ids)

        log.debug('Registered network %s with magic %s', params.NAME, net.hex())

    def must_register(self, params):
        """Same as register() but aborts on error

        Only meant for hard-coded, known good parameters registered while the
        application starts, where a duplicate means the application itself is
        broken.
        """
        try:
            self.register(params)
        except DuplicateNetworkError as err:
            log.critical('Failed to register network %s: %s', params.NAME, err)
            raise RuntimeError('failed to register network: %s' % err) from err

    def is_pubkey_hash_addr_id(self, id):
        """Return True if id prefixes P2PKH addresses on any registered network

        It's up to the caller to also check is_script_hash_addr_id() and decide
        whether an address is pubkey hash, script hash, neither, or
        undeterminable if both return True.
        """
        return id in self._index.pubkey_hash_addr_ids

    def is_script_hash_addr_id(self, id):
        """Return True if id prefixes P2SH addresses on any registered network

        See is_pubkey_hash_addr_id()
        """
        return id in self._index.script_hash_addr_ids

    def is_bech32_segwit_prefix(self, prefix):
        """Return True if prefix starts segwit addresses on any registered network

        prefix is the human-readable part including the '1' separator and is
        compared case-insensitively. Anything other than a str is never a
        prefix.
        """
        if not isinstance(prefix, str):
            return False
        return prefix.lower() in self._index.bech32_segwit_prefixes

    def hd_private_key_to_public_key_id(self, id):
        """Return the public HD extended key magic paired with a private one

        Raises UnknownHDKeyIDError if id isn't 4 bytes long or isn't
        registered.
        """
        if not isinstance(id, (bytes, bytearray, memoryview)):
            raise TypeError('Expected bytes-like HD key id; got %r' % id)
        id = bytes(id)
        if len(id) != 4:
            raise UnknownHDKeyIDError('HD key id must be exactly 4 bytes; got %d bytes' % len(id))
        try:
            return self._index.hd_priv_to_pub_ids[id]
        except KeyError:
            raise UnknownHDKeyIDError('Unknown HD private extended key id %s' % id.hex())

    def lookup_net(self, net):
        """Return the registered parameters whose MESSAGE_START is net

        net is bytes-like; anything else raises TypeError. Raises
        UnknownNetworkError if there are none.
        """
        if not isinstance(net, (bytes, bytearray, memoryview)):
            raise TypeError('Expected bytes-like network magic; got %r' % (net,))
        try:
            return self._index.nets[bytes(net)]
        except KeyError:
            raise UnknownNetworkError('Unknown network magic %r' % (net,))

    def lookup_name(self, name):
        """Return the earliest registered parameters called name

        Raises UnknownNetworkError if there are none.
        """
        for params in self._index.nets.values():
            if params.NAME == name:
                return params
        raise UnknownNetworkError('Unknown network %r' % name)

    def __contains__(self, net):
        return net in self._index.nets

    def __iter__(self):
        return iter(list(self._index.nets.values()))

    def __len__(self):
        return len(self._index.nets)

    def __repr__(self):
        return 'NetworkRegistry(%s)' % ', '.join(p.NAME for p in self)
