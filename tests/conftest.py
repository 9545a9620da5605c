# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from restclient import default


@pytest.fixture(autouse=True)
def _clear_default_client():
    default.set_default_client(None)
    yield
    default.set_default_client(None)
