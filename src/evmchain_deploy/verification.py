"""Source verification through the Etherscan contract API."""

import json
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests
from eth_abi import encode
from eth_utils.abi import collapse_if_tuple

from .constants import (
    ALREADY_VERIFIED_MARKER,
    ETHERSCAN_API_URL,
    HTTP_TIMEOUT,
    VERIFICATION_STATUS_CHECKS,
    VERIFICATION_STATUS_INTERVAL,
)
from .exceptions import VerificationError
from .types import CompiledContract, VerificationOutcome

logger = logging.getLogger(__name__)


def classify_verification_error(message: str) -> VerificationOutcome:
    """
    Classify a verification failure message.

    A message containing "already verified" (any case) means an earlier run
    registered this address and counts as success.

    Returns:
        VerificationOutcome.ALREADY_VERIFIED or VerificationOutcome.FAILED
    """
    if ALREADY_VERIFIED_MARKER in message.lower():
        return VerificationOutcome.ALREADY_VERIFIED
    return VerificationOutcome.FAILED


def encode_constructor_args(abi: List[Dict[str, Any]], args: Sequence[Any]) -> str:
    """
    ABI-encode constructor arguments as unprefixed hex.

    Returns an empty string for contracts without constructor arguments.
    """
    constructor = next((item for item in abi if item.get("type") == "constructor"), None)
    inputs = constructor.get("inputs", []) if constructor else []

    if len(inputs) != len(args):
        raise VerificationError(
            f"Constructor expects {len(inputs)} argument(s), got {len(args)}"
        )
    if not inputs:
        return ""

    types = [collapse_if_tuple(param) for param in inputs]
    return encode(types, list(args)).hex()


class EtherscanVerifier:
    """Submits standard-JSON compiler input to an Etherscan-compatible API."""

    def __init__(
        self,
        api_key: str,
        chain_id: int,
        compiled: CompiledContract,
        api_url: str = ETHERSCAN_API_URL,
        poll_interval: float = VERIFICATION_STATUS_INTERVAL,
        max_status_checks: int = VERIFICATION_STATUS_CHECKS,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._api_key = api_key
        self._chain_id = chain_id
        self._compiled = compiled
        self._api_url = api_url
        self._poll_interval = poll_interval
        self._max_status_checks = max_status_checks
        self._session = session or requests.Session()
        self._sleep = sleep

    def _call(self, method: str, params: Dict[str, Any], data: Optional[Dict[str, Any]] = None) -> str:
        """
        Make one API call and return its "result" field.

        Raises:
            VerificationError: On HTTP, network or API-level errors
        """
        query = {"chainid": self._chain_id, "apikey": self._api_key, **params}
        try:
            response = self._session.request(
                method, self._api_url, params=query, data=data, timeout=HTTP_TIMEOUT
            )
        except requests.RequestException as e:
            raise VerificationError(f"Network error during verification request: {e}") from e

        if response.status_code != 200:
            raise VerificationError(
                f"Verification request failed with status {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise VerificationError(f"Invalid response from verification service: {e}") from e

        if str(body.get("status")) != "1":
            raise VerificationError(str(body.get("result") or body.get("message")))

        return body["result"]

    def submit(self, address: str, constructor_args: Sequence[Any]) -> str:
        """
        Submit the contract source for verification.

        Returns:
            GUID to poll with check_status()
        """
        compiled = self._compiled
        if compiled.standard_json_input is None or compiled.compiler_version is None:
            raise VerificationError(
                f"No build info for {compiled.name}; recompile to produce artifacts/build-info"
            )

        payload = {
            "module": "contract",
            "action": "verifysourcecode",
            "contractaddress": address,
            "sourceCode": json.dumps(compiled.standard_json_input),
            "codeformat": "solidity-standard-json-input",
            "contractname": compiled.fully_qualified_name,
            "compilerversion": f"v{compiled.compiler_version}",
            # Misspelling is part of the Etherscan API
            "constructorArguements": encode_constructor_args(compiled.abi, constructor_args),
        }
        return self._call("POST", {}, data=payload)

    def check_status(self, guid: str) -> str:
        """Return the status text for a verification request."""
        try:
            return self._call("GET", {"module": "contract", "action": "checkverifystatus", "guid": guid})
        except VerificationError as e:
            # Pending requests come back with status "0"
            if "pending" in str(e).lower():
                return str(e)
            raise

    def verify(self, address: str, constructor_args: Sequence[Any]) -> None:
        """
        Verify a deployed contract and wait for the service's verdict.

        Raises:
            VerificationError: If the service rejects the request, reports a
                               failure, or has not decided after the last check
        """
        guid = self.submit(address, constructor_args)
        logger.info("Verification request %s submitted for %s", guid, address)

        for _ in range(self._max_status_checks):
            self._sleep(self._poll_interval)
            status = self.check_status(guid)
            logger.debug("Verification request %s: %s", guid, status)

            if "pending" in status.lower():
                continue
            if status.lower().startswith("pass"):
                return
            raise VerificationError(status)

        raise VerificationError(
            f"Verification request {guid} still pending after {self._max_status_checks} checks"
        )
