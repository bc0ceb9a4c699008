from enum import IntEnum

from brownie import Contract, VRFCoordinatorV2Mock, Wei, accounts, config, network

LOCAL_BLOCKCHAIN_DEVELOPMENT = ["development", "ganache-local"]

# Contract to name dictionary
contract_to_mock = {"vrf_coordinator": VRFCoordinatorV2Mock}

BASE_FEE = Wei("0.25 ether")  # premium per request, in LINK
GAS_PRICE_LINK = 10**9  # LINK per gas
VRF_SUB_FUND_AMOUNT = Wei("10 ether")


class LotteryState(IntEnum):
    OPEN = 0
    CALCULATING = 1


def network_config(key=None, default=None):
    settings = config["networks"][network.show_active()]
    if key is None:
        return settings
    return settings.get(key, default)


def get_account(index=None, id=None):
    """
    Return account based on the current active network deploying the contract.
    @para: index - for specific index from brownie's accounts list
       id - for specific id of brownie's accounts list
       not provided and on a local network - accounts[0]
       default - the "from_key" wallet from the config file
    """
    if index is not None:
        return accounts[index]
    if id:
        return accounts.load(id)
    if network.show_active() in LOCAL_BLOCKCHAIN_DEVELOPMENT:
        return accounts[0]
    return accounts.add(config["wallets"]["from_key"])


def get_contract(contract_name):
    """
    This function will grab the contract address from the brownie config if defined,
    otherwise, it will deploy a mock version of that contract and will return that
    contract.

        Args:
            contract_name (string)

        Returns:
            brownie.network.contract.ProjectContract - the most recently deployed version
            of that contract.
    """
    contract_type = contract_to_mock[contract_name]
    if network.show_active() not in LOCAL_BLOCKCHAIN_DEVELOPMENT:  # live network -> no need for mocks
        contract_address = network_config(contract_name)
        contract = Contract.from_abi(contract_type._name, contract_address, contract_type.abi)
    else:  # working on development network -> need to deploy mocks
        if len(contract_type) <= 0:  # if no previous mock deployed
            deploy_mocks()
        contract = contract_type[-1]
    return contract


def deploy_mocks():
    account = get_account()
    print("Deploying Mock!")
    VRFCoordinatorV2Mock.deploy(BASE_FEE, GAS_PRICE_LINK, {"from": account})
    print("Deployed!")
    print("--------------------------------")


def create_subscription(vrf_coordinator=None, amount=VRF_SUB_FUND_AMOUNT):
    # On a live network, the subscription is made on vrf.chain.link
    if network.show_active() not in LOCAL_BLOCKCHAIN_DEVELOPMENT:
        return network_config("subscription_id")
    # Else working on local development
    account = get_account()
    vrf_coordinator = vrf_coordinator or get_contract("vrf_coordinator")
    tx = vrf_coordinator.createSubscription({"from": account})
    tx.wait(1)
    subscription_id = tx.events["SubscriptionCreated"]["subId"]
    # The v2 mock is funded directly, without a LINK token
    tx = vrf_coordinator.fundSubscription(subscription_id, amount, {"from": account})
    tx.wait(1)
    return subscription_id


def add_consumer(consumer, subscription_id, vrf_coordinator=None):
    """Only the subscription owner may add consumers, on a live network that is the from_key wallet."""
    account = get_account()
    vrf_coordinator = vrf_coordinator or get_contract("vrf_coordinator")
    tx = vrf_coordinator.addConsumer(subscription_id, consumer.address, {"from": account})
    tx.wait(1)
    print(f"Added {consumer.address} as consumer of subscription {subscription_id}")
    return tx
