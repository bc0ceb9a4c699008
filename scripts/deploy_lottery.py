import json
import os
import shutil
import time

import yaml
from brownie import Lottery, chain, network

from scripts.helpful_scripts import (
    LOCAL_BLOCKCHAIN_DEVELOPMENT,
    LotteryState,
    add_consumer,
    create_subscription,
    get_account,
    get_contract,
    network_config,
)

BUILD_DIR = "./build"
CONFIG_FILE = "brownie-config.yaml"
FRONT_END_DIR = "../nextjs-smartcontract-lottery"
WINNER_TIMEOUT = 300
POLL_INTERVAL = 10


class DrawFailed(Exception):
    pass


def deploy_lottery(front_end_update=False, interval=None):
    account = get_account()
    vrf_coordinator = get_contract("vrf_coordinator")
    subscription_id = create_subscription(vrf_coordinator)
    lottery = Lottery.deploy(
        vrf_coordinator.address,
        network_config("entrance_fee"),
        network_config("gas_lane"),
        subscription_id,
        network_config("callback_gas_limit"),
        network_config("interval") if interval is None else interval,
        {"from": account},
    )
    lottery.tx.wait(network_config("block_confirmations", 1))
    print(f"SUCCESS! Contract deployed at {lottery.address}")
    add_consumer(lottery, subscription_id, vrf_coordinator)
    if network.show_active() not in LOCAL_BLOCKCHAIN_DEVELOPMENT:
        print(f"Register an upkeep for {lottery.address} at automation.chain.link")
    if front_end_update:
        update_front_end()
    print("--------------------------------------")
    return lottery


def enter_lottery(account=None):
    account = account or get_account()
    lottery = Lottery[-1]
    value = lottery.getEntranceFee()
    tx = lottery.enterLottery({"from": account, "value": value})
    tx.wait(1)
    print("You entered the Lottery!!")
    return tx


def pick_winner(timeout=WINNER_TIMEOUT, since=None):
    """
    Run one draw on the latest lottery and return the winner.

    Locally we play both keeper and oracle: travel past the interval, perform
    the upkeep and fulfil the request through the mock. On a live network
    Chainlink Automation and VRF do that, so we wait for the draw to land.
    Raises DrawFailed when no upkeep is needed or the lottery rejects the
    fulfilment.
    """
    lottery = Lottery[-1]
    if network.show_active() not in LOCAL_BLOCKCHAIN_DEVELOPMENT:
        print("Waiting for Chainlink Automation and VRF...")
        winner = wait_for_winner(lottery, timeout, since=since)
        print(f"The winner is {winner}")
        return winner
    account = get_account()
    # Time travel on local development, then mine so the new time counts
    chain.sleep(lottery.getInterval() + 1)
    chain.mine()
    upkeep_needed, _ = lottery.checkUpkeep(b"")
    if not upkeep_needed:
        state = LotteryState(lottery.getLotteryState())
        raise DrawFailed(
            f"Upkeep not needed: {state.name} with {lottery.getNumberOfPlayers()} player(s)"
        )
    tx = lottery.performUpkeep(b"", {"from": account})
    tx.wait(1)
    request_id = tx.events["RequestedWinner"]["requestId"]
    tx = get_contract("vrf_coordinator").fulfillRandomWords(request_id, lottery.address, {"from": account})
    tx.wait(1)
    if not tx.events["RandomWordsFulfilled"]["success"]:
        raise DrawFailed(f"Lottery rejected the random words for request {request_id}")
    winner = lottery.getRecentWinner()
    print(f"The winner is {winner}")
    return winner


def wait_for_winner(lottery, timeout=WINNER_TIMEOUT, poll_interval=POLL_INTERVAL, since=None):
    """
    Poll until a draw newer than `since` lands and return its winner.

    `since` is a getLatestTimeStamp() value taken before entering; without it
    the current one is used, so only a draw that happens from now on counts.
    """
    if since is None:
        since = lottery.getLatestTimeStamp()
    deadline = time.time() + timeout
    while lottery.getLatestTimeStamp() <= since:
        if time.time() >= deadline:
            raise TimeoutError(f"No winner picked within {timeout}s")
        time.sleep(poll_interval)
    return lottery.getRecentWinner()


def get_lottery_state():
    lottery = Lottery[-1]
    state = LotteryState(lottery.getLotteryState())
    print(f"Lottery {lottery.address} is {state.name} with {lottery.getNumberOfPlayers()} player(s)")
    return state


def update_front_end(front_end_dir=FRONT_END_DIR, build_dir=BUILD_DIR, config_file=CONFIG_FILE):
    # Sending frontend our build folder
    copy_folders_to_front_end(build_dir, os.path.join(front_end_dir, "chain-info"))
    # Sending frontend config in JSON format, placeholders left unexpanded
    with open(config_file, "r") as brownie_config:
        config_dict = yaml.load(brownie_config, Loader=yaml.FullLoader)
        with open(os.path.join(front_end_dir, "brownie-config.json"), "w") as brownie_config_json:
            json.dump(config_dict, brownie_config_json)
    print("Front end updated!")


def copy_folders_to_front_end(src, dest):
    """
    Function to copy folders from source to destination.

        args:
            src - source to copy from
            dest - destination to copy to
    """
    if os.path.exists(dest):
        shutil.rmtree(dest)
    shutil.copytree(src, dest)


def main():
    lottery = deploy_lottery()
    since = lottery.getLatestTimeStamp()
    enter_lottery()
    pick_winner(since=since)
    get_lottery_state()
