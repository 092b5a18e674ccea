"""Configuration constants for evmchain-deploy library."""

# Compiler version the artifacts must have been built with
SOLIDITY_VERSION = "0.8.19"

# Contract deployed when no name is given on the command line
DEFAULT_CONTRACT_NAME = "Pos25"

# Confirmation depths
DEPLOY_CONFIRMATIONS = 1  # before the address is reported
VERIFY_CONFIRMATIONS = 10  # before the verification service is called

# Environment variables shared by all networks
PRIVATE_KEY_ENV = "PRIVATE_KEY"
ETHERSCAN_API_KEY_ENV = "ETHERSCAN_API_KEY"

# Supported networks, keyed by the name passed on the command line
NETWORK_CONFIG = {
    "goerli": {
        "chain_id": 5,
        "chain_name": "Goerli",
        "block_explorer_url": "https://goerli.etherscan.io",
        "rpc_env": "PROVIDER_TESTNET_URL",
    },
    "mainnet": {
        "chain_id": 1,
        "chain_name": "Ethereum Mainnet",
        "block_explorer_url": "https://etherscan.io",
        "rpc_env": "PROVIDER_MAINNET_URL",
    },
}

# Etherscan multichain API; the target chain is selected with ?chainid=
ETHERSCAN_API_URL = "https://api.etherscan.io/v2/api"

# Substring (compared case-insensitively) that marks a benign verification error
ALREADY_VERIFIED_MARKER = "already verified"

# Polling defaults, in seconds
DEFAULT_POLL_INTERVAL = 4.0
VERIFICATION_STATUS_INTERVAL = 5.0
VERIFICATION_STATUS_CHECKS = 12
HTTP_TIMEOUT = 30
