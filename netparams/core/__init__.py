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

"""Consensus-critical chain parameters

Everything in here is inert data: the values are carried around by the
network parameter sets and interpreted by whatever validates blocks, retargets
difficulty or counts deployment votes. Nothing in this module checks
proof-of-work or computes activation state.
"""

import binascii
import enum
import types

MAX_INT64 = 2**63 - 1


def x(h):
    """Convert a hex string to bytes"""
    return binascii.unhexlify(h.encode('utf8'))

def b2x(b):
    """Convert bytes to a hex string"""
    return binascii.hexlify(b).decode('utf8')

def lx(h):
    """Convert a little-endian hex string to bytes

    Lets you write uint256's and uint160's the way the Satoshi codebase shows
    them.
    """
    return binascii.unhexlify(h.encode('utf8'))[::-1]

def b2lx(b):
    """Convert bytes to a little-endian hex string

    Lets you show uint256's and uint160's the way the Satoshi codebase shows
    them.
    """
    return binascii.hexlify(b[::-1]).decode('utf8')


class ImmutableRecord(object):
    """Base class for records that can't be changed once constructed

    Subclasses list their fields in __slots__ and set them in __init__ with
    object.__setattr__()
    """
    __slots__ = []

    def __setattr__(self, name, value):
        raise AttributeError('%s is immutable' % self.__class__.__name__)

    def __delattr__(self, name):
        raise AttributeError('%s is immutable' % self.__class__.__name__)

    def _fields(self):
        return tuple(getattr(self, name) for name in self.__slots__)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented
        return self._fields() == other._fields()

    def __ne__(self, other):
        return not (self == other)

    def __hash__(self):
        return hash(self._fields())


class DeploymentID(enum.IntEnum):
    """Soft-fork deployments voted in with BIP9 version bits

    Use these as keys into a DEPLOYMENTS table rather than positional indexes.
    """
    TESTDUMMY = 0

    # BIPs 68, 112 and 113
    CSV = 1

    # BIPs 141, 142, 144, 145, 147 and 173
    SEGWIT = 2


class ConsensusDeployment(ImmutableRecord):
    """A consensus rule change that is voted in

    bit_number  - Bit of the block version that signals the deployment.
    start_time  - Median block time after which voting starts.
    expire_time - Median block time after which the deployment expires.
    """
    __slots__ = ['bit_number', 'start_time', 'expire_time']

    def __init__(self, bit_number, start_time, expire_time):
        if not (0 <= bit_number <= 28):
            raise ValueError('ConsensusDeployment: bit_number must be in range 0 to 28; got %d' % bit_number)
        if not (0 <= start_time <= expire_time):
            raise ValueError('ConsensusDeployment: need 0 <= start_time <= expire_time; got %d, %d' %
                             (start_time, expire_time))
        object.__setattr__(self, 'bit_number', bit_number)
        object.__setattr__(self, 'start_time', start_time)
        object.__setattr__(self, 'expire_time', expire_time)

    def __repr__(self):
        return 'ConsensusDeployment(%d, %d, %d)' % (self.bit_number, self.start_time, self.expire_time)


class Checkpoint(ImmutableRecord):
    """A known good point in the block chain"""
    __slots__ = ['height', 'hash']

    def __init__(self, height, hash):
        if height < 0:
            raise ValueError('Checkpoint: height must be non-negative; got %d' % height)
        if not len(hash) == 32:
            raise ValueError('Checkpoint: hash must be exactly 32 bytes; got %d bytes' % len(hash))
        object.__setattr__(self, 'height', height)
        object.__setattr__(self, 'hash', bytes(hash))

    def __repr__(self):
        return 'Checkpoint(%d, lx(%r))' % (self.height, b2lx(self.hash))


class DNSSeed(ImmutableRecord):
    """A DNS seed

    has_filtering is True if the seed supports filtering by service flags.
    """
    __slots__ = ['host', 'has_filtering']

    def __init__(self, host, has_filtering=False):
        object.__setattr__(self, 'host', host)
        object.__setattr__(self, 'has_filtering', bool(has_filtering))

    def __str__(self):
        return self.host

    def __repr__(self):
        return 'DNSSeed(%r, %r)' % (self.host, self.has_filtering)


class GenesisBlock(ImmutableRecord):
    """Reference to the first block of a chain

    Only the header fields are kept. hashMerkleRoot and hash are None where
    they aren't known; nothing here ever recomputes them.
    """
    __slots__ = ['nVersion', 'hashPrevBlock', 'hashMerkleRoot', 'nTime', 'nBits', 'nNonce', 'hash']

    def __init__(self, nVersion=1, hashPrevBlock=b'\x00'*32, hashMerkleRoot=None, nTime=0, nBits=0, nNonce=0,
                 hash=None):
        if not len(hashPrevBlock) == 32:
            raise ValueError('GenesisBlock: hashPrevBlock must be exactly 32 bytes; got %d bytes' % len(hashPrevBlock))
        for name, h in (('hashMerkleRoot', hashMerkleRoot), ('hash', hash)):
            if h is not None and len(h) != 32:
                raise ValueError('GenesisBlock: %s must be exactly 32 bytes; got %d bytes' % (name, len(h)))
        object.__setattr__(self, 'nVersion', nVersion)
        object.__setattr__(self, 'hashPrevBlock', hashPrevBlock)
        object.__setattr__(self, 'hashMerkleRoot', hashMerkleRoot)
        object.__setattr__(self, 'nTime', nTime)
        object.__setattr__(self, 'nBits', nBits)
        object.__setattr__(self, 'nNonce', nNonce)
        object.__setattr__(self, 'hash', hash)

    def __repr__(self):
        def h(b):
            return 'None' if b is None else 'lx(%r)' % b2lx(b)
        return "%s(%i, %s, %s, %s, 0x%08x, 0x%08x, %s)" % \
                (self.__class__.__name__, self.nVersion, h(self.hashPrevBlock), h(self.hashMerkleRoot),
                 self.nTime, self.nBits, self.nNonce, h(self.hash))


def freeze_deployments(deployments):
    """Return a read-only DEPLOYMENTS table keyed by DeploymentID

    Raises ValueError if any DeploymentID is missing.
    """
    table = {}
    for key, deployment in dict(deployments).items():
        table[DeploymentID(key)] = deployment
    missing = [d.name for d in DeploymentID if d not in table]
    if missing:
        raise ValueError('Deployments not defined: %s' % ', '.join(missing))
    return types.MappingProxyType(table)


class CoreChainParams(object):
    """Define consensus-critical parameters of a given instance of the system"""
    NAME = None
    GENESIS_BLOCK = None
    PROOF_OF_WORK_LIMIT = None
    POW_LIMIT_BITS = None

    # Heights at which the given BIP became active
    BIP34_HEIGHT = 0
    BIP65_HEIGHT = 0
    BIP66_HEIGHT = 0

    COINBASE_MATURITY = 100
    SUBSIDY_HALVING_INTERVAL = None

    # All times are in seconds
    TARGET_TIMESPAN = None
    TARGET_TIME_PER_BLOCK = None
    RETARGET_ADJUSTMENT_FACTOR = 4 # 25% less, 400% more
    RETARGET_ADJUSTMENT_FACTOR_MIN = None
    RETARGET_ADJUSTMENT_FACTOR_MAX = None
    REDUCE_MIN_DIFFICULTY = False
    MIN_DIFF_REDUCTION_TIME = 0
    GENERATE_SUPPORTED = False

    # Ordered from oldest to newest
    CHECKPOINTS = ()

    # BIP9 voting. The confirmation window is the target timespan divided by
    # the target spacing.
    RULE_CHANGE_ACTIVATION_THRESHOLD = None
    MINER_CONFIRMATION_WINDOW = None
    DEPLOYMENTS = None

_ALWAYS_AVAILABLE = freeze_deployments({
    DeploymentID.TESTDUMMY: ConsensusDeployment(28, 0, MAX_INT64),
    DeploymentID.CSV:       ConsensusDeployment(0, 0, MAX_INT64),
    DeploymentID.SEGWIT:    ConsensusDeployment(1, 0, MAX_INT64),
})

class CoreMainParams(CoreChainParams):
    NAME = 'mainnet'
    GENESIS_BLOCK = GenesisBlock(nVersion=1,
                                 hashMerkleRoot=lx('b3e47e8776012ee4352acf603e6b9df005445dcba85c606697f422be3cc26f9b'),
                                 nTime=1392841423, nBits=0x1e0ffff0, nNonce=3236648,
                                 hash=lx('4e56204bb7b8ac06f860ff1c845f03f984303b5b97eb7b42868f714611aed94b'))
    PROOF_OF_WORK_LIMIT = 2**236 - 1
    POW_LIMIT_BITS = 504365055
    BIP34_HEIGHT = 1
    SUBSIDY_HALVING_INTERVAL = 840000
    TARGET_TIMESPAN = 60
    TARGET_TIME_PER_BLOCK = 60
    RETARGET_ADJUSTMENT_FACTOR_MIN = 4
    RETARGET_ADJUSTMENT_FACTOR_MAX = 2
    RULE_CHANGE_ACTIVATION_THRESHOLD = 15120 # 75% of 20160
    MINER_CONFIRMATION_WINDOW = 20160 # about two weeks
    DEPLOYMENTS = freeze_deployments({
        DeploymentID.TESTDUMMY: ConsensusDeployment(28, 1199145601, 1230767999), # 2008-01-01 to 2008-12-31
        DeploymentID.CSV:       ConsensusDeployment(0, 1485561600, 1517356801), # 2017-01-28 to 2018-01-31
        DeploymentID.SEGWIT:    ConsensusDeployment(1, 1485561600, 1517356801),
    })

class CoreTestNet4Params(CoreMainParams):
    NAME = 'testnet4'
    GENESIS_BLOCK = GenesisBlock(nVersion=1,
                                 hashMerkleRoot=lx('b3e47e8776012ee4352acf603e6b9df005445dcba85c606697f422be3cc26f9b'),
                                 nTime=1494757042, nBits=0x1e0ffff0, nNonce=2231829,
                                 hash=lx('a4271888b5e60092c3e7183a76d454741e9a7a55f2b4afbe574615829e406bee'))
    RULE_CHANGE_ACTIVATION_THRESHOLD = 15
    MINER_CONFIRMATION_WINDOW = 15
    DEPLOYMENTS = freeze_deployments({
        DeploymentID.TESTDUMMY: ConsensusDeployment(28, 1199145601, 1230767999),
        DeploymentID.CSV:       ConsensusDeployment(0, 1483228800, 1546300800), # 2017-01-01 to 2019-01-01
        DeploymentID.SEGWIT:    ConsensusDeployment(1, 1483228800, 1546300800),
    })

class CoreRegTestParams(CoreChainParams):
    NAME = 'regtest'
    GENESIS_BLOCK = GenesisBlock(nVersion=1,
                                 hashMerkleRoot=lx('97ddfbbae6be97fd6cdf3e7ca13232a3afff2353e29badfab7f73011edd4ced9'),
                                 nTime=1296688602, nBits=0x207fffff, nNonce=0,
                                 hash=lx('530827f38f93b43ed12af0b3ad25a288dc02ed74d6d7857862df51fc56c416f9'))
    PROOF_OF_WORK_LIMIT = 2**255 - 1
    POW_LIMIT_BITS = 0x207fffff
    BIP34_HEIGHT = 100000000 # not active, permits version 1 blocks
    BIP65_HEIGHT = 1351
    BIP66_HEIGHT = 1251
    SUBSIDY_HALVING_INTERVAL = 150
    TARGET_TIMESPAN = 60 * 60 * 84 # 3.5 days
    TARGET_TIME_PER_BLOCK = 150
    REDUCE_MIN_DIFFICULTY = True
    MIN_DIFF_REDUCTION_TIME = 150
    GENERATE_SUPPORTED = True
    RULE_CHANGE_ACTIVATION_THRESHOLD = 108 # 75% of 144
    MINER_CONFIRMATION_WINDOW = 144
    DEPLOYMENTS = _ALWAYS_AVAILABLE

class CoreSimNetParams(CoreChainParams):
    NAME = 'simnet'
    GENESIS_BLOCK = GenesisBlock(nVersion=1,
                                 hashMerkleRoot=lx('b3e47e8776012ee4352acf603e6b9df005445dcba85c606697f422be3cc26f9b'),
                                 nTime=1401292357, nBits=0x207fffff, nNonce=2,
                                 hash=lx('683e86bd5c6d110d91b94b97137ba6bfe02dbbdb8e3dff722a669b5d69d77af6'))
    PROOF_OF_WORK_LIMIT = 2**255 - 1
    POW_LIMIT_BITS = 0x207fffff
    SUBSIDY_HALVING_INTERVAL = 210000
    TARGET_TIMESPAN = 60 * 60 * 24 * 14 # 14 days
    TARGET_TIME_PER_BLOCK = 60 * 10
    REDUCE_MIN_DIFFICULTY = True
    MIN_DIFF_REDUCTION_TIME = 60 * 20
    GENERATE_SUPPORTED = True
    RULE_CHANGE_ACTIVATION_THRESHOLD = 75 # 75% of 100
    MINER_CONFIRMATION_WINDOW = 100
    DEPLOYMENTS = _ALWAYS_AVAILABLE

"""Master global setting for what core chain params we're using"""
coreparams = CoreMainParams()

def _SelectCoreParams(params):
    """Select the core chain parameters to use

    Don't use this directly, use netparams.SelectParams() instead so both
    consensus-critical and general parameters are set properly.
    """
    global coreparams
    coreparams = params
