from __future__ import annotations

import threading

from botplug import Adapter, Handler, Registry


class ShellAdapter(Adapter):
    pass


class EchoHandler(Handler):
    pass


def _populated() -> Registry:
    reg = Registry()
    reg.register_adapter("shell", ShellAdapter)
    reg.register_handler(EchoHandler)
    reg.register_hook("startup", object())
    reg.config.robot.name = "Marvin"
    return reg


def test_each_reset_gives_a_new_empty_container() -> None:
    reg = _populated()

    adapters, handlers, hooks, config = reg.adapters, reg.handlers, reg.hooks, reg.config

    reg.reset_adapters()
    assert reg.adapters == {}
    assert reg.adapters is not adapters

    reg.reset_handlers()
    assert reg.handlers == set()
    assert reg.handlers is not handlers

    reg.reset_hooks()
    assert len(reg.hooks) == 0
    assert reg.hooks is not hooks

    reg.reset_config()
    assert reg.config is not config
    assert reg.config.robot.name == "Bot"


def test_resetting_one_container_leaves_the_others() -> None:
    reg = _populated()
    config = reg.config

    reg.reset_handlers()

    assert reg.handlers == set()
    assert reg.adapters == {"shell": ShellAdapter}
    assert len(reg.hooks["startup"]) == 1
    assert reg.config is config


def test_reset_clears_everything() -> None:
    reg = _populated()
    config = reg.config

    reg.reset()

    assert reg.adapters == {}
    assert reg.handlers == set()
    assert len(reg.hooks) == 0
    assert reg.config is not config


def test_reset_is_safe_on_untouched_registry() -> None:
    reg = Registry()
    reg.reset()
    reg.reset_adapters()
    reg.reset_hooks()
    reg.clear_config()
    assert reg.adapters == {}


def test_concurrent_first_access_shares_one_container() -> None:
    reg = Registry()
    seen: list[int] = []
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait()
        seen.append(id(reg.handlers))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(set(seen)) == 1
