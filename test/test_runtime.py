# discord-lite runtime tests
import sys
import threading
from pathlib import Path

# Ensure project root is importable when running tests without installation.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from discord_lite.events import (
    ChannelsLoaded,
    FetchChannels,
    FetchGuilds,
    GuildListing,
    GuildsLoaded,
    Login,
    LoginResult,
    SelectGuild,
    TokenInputChanged,
    VerifyIdentity,
)
from discord_lite.models import Channel, Guild, Identity
from discord_lite.runtime import ClientRuntime
from discord_lite.type_enums import ChannelKind

ME = Identity(id="u1", username="me")


class FakeGateway:
    def __init__(self):
        self.executed = []
        self.thread_names = []
        self.gates = {}

    def execute(self, effect):
        self.executed.append(effect)
        self.thread_names.append(threading.current_thread().name)
        if isinstance(effect, VerifyIdentity):
            return LoginResult(token=effect.token, identity=ME)
        if isinstance(effect, FetchGuilds):
            guilds = [Guild(id="g1", name="One"), Guild(id="g2", name="Two")]
            return GuildsLoaded(token=effect.token, listing=GuildListing(guilds=guilds))
        if isinstance(effect, FetchChannels):
            gate = self.gates.get(effect.guild_id)
            if gate is not None:
                gate.wait(5)
            channel = Channel(id=f"{effect.guild_id}-general", kind=ChannelKind.TEXT, name="general")
            return ChannelsLoaded(guild_id=effect.guild_id, channels=[channel])
        raise AssertionError(f"unexpected effect {effect!r}")


def test_login_flow_runs_effects_off_thread_and_applies_results():
    gateway = FakeGateway()
    with ClientRuntime(gateway=gateway, max_workers=2) as runtime:
        runtime.dispatch(TokenInputChanged("tok"))
        runtime.dispatch(Login())
        assert runtime.wait_idle(timeout=5)

        state = runtime.state
        assert state.is_authenticated
        assert [g.id for g in state.guilds] == ["g1", "g2"]
        assert [type(e) for e in gateway.executed] == [VerifyIdentity, FetchGuilds]
        assert all(name.startswith("discord-lite") for name in gateway.thread_names)


def test_late_result_for_previous_guild_is_discarded():
    gateway = FakeGateway()
    slow = threading.Event()
    gateway.gates["g1"] = slow
    with ClientRuntime(gateway=gateway, max_workers=2) as runtime:
        runtime.dispatch(TokenInputChanged("tok"))
        runtime.dispatch(Login())
        assert runtime.wait_idle(timeout=5)

        runtime.dispatch(SelectGuild("g1"))
        runtime.dispatch(SelectGuild("g2"))
        assert not runtime.wait_idle(timeout=0.2)
        assert [c.id for c in runtime.state.channels] == ["g2-general"]

        slow.set()
        assert runtime.wait_idle(timeout=5)
        assert runtime.state.selected_guild_id == "g2"
        assert [c.id for c in runtime.state.channels] == ["g2-general"]


def test_process_pending_without_results_returns_zero():
    with ClientRuntime(gateway=FakeGateway()) as runtime:
        assert runtime.process_pending() == 0
        assert runtime.in_flight == 0


def test_dispatch_without_effects_does_not_submit():
    gateway = FakeGateway()
    with ClientRuntime(gateway=gateway) as runtime:
        runtime.dispatch(TokenInputChanged("abc"))
        assert runtime.wait_idle(timeout=1)
        assert gateway.executed == []
        assert runtime.state.token_input == "abc"
