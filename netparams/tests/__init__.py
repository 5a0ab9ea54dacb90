# Copyright (C) 2013-2018 The python-netparams developers
#
# This file is part of python-netparams.
#
# It is subject to the license terms in the LICENSE file found in the top-level
# directory of this distribution.
#
# No part of python-netparams, including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.
