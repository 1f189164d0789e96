# /*
# Copyright 2026 The Rancher E2E Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Utility functions for not-found handling and CLI value parsing."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import requests
from botocore.exceptions import ClientError
from kubernetes.client.exceptions import ApiException

from rancher_e2e import logger
from rancher_e2e.constants import EC2_NOT_FOUND_CODES

T = TypeVar("T")


def is_not_found(err: BaseException) -> bool:
    """Report whether *err* means the target resource does not exist.

    Understands Kubernetes API errors, Rancher HTTP errors, and EC2 client
    errors.

    Args:
        err: Exception raised by a client call.

    Returns:
        True for 404 responses and EC2 "instance not found" codes.
    """
    if isinstance(err, ApiException):
        return err.status == 404
    if isinstance(err, requests.HTTPError):
        return err.response is not None and err.response.status_code == 404
    if isinstance(err, ClientError):
        return err.response.get("Error", {}).get("Code") in EC2_NOT_FOUND_CODES
    return False


def ignore_not_found(func: Callable[[], T]) -> tuple[T | None, bool]:
    """Call a delete-style function, treating "not found" as success.

    Args:
        func: Zero-argument callable issuing the request.

    Returns:
        Tuple of (result, found). *found* is False when the target was
        already absent, in which case *result* is None.

    Raises:
        Exception: Any error from *func* other than "not found".
    """
    try:
        return func(), True
    except (ApiException, requests.HTTPError, ClientError) as err:
        if not is_not_found(err):
            raise
        logger.info("Resource already absent: %s", err)
        return None, False


def parse_key_values(items: list[str]) -> dict[str, str]:
    """Parse ``key=value`` strings into a dictionary.

    Args:
        items: Strings of the form ``key=value``.

    Returns:
        Mapping of keys to values.

    Raises:
        ValueError: If an item has no ``=`` or an empty key.
    """
    result: dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got '{item}'")
        result[key] = value
    return result
