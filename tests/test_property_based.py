"""Property-based tests using hypothesis."""

from hypothesis import given, strategies as st

from pushbridge.events import completed, failed
from pushbridge.stream import Subject
from tests.mocks import RecordingObserver

terminals = st.one_of(st.just(None), st.text(max_size=5)).map(
    lambda payload: completed() if payload is None else failed(payload)
)


class TestPropertyBased:
    """Property-based tests for stream invariants."""

    @given(st.lists(st.integers()), st.integers(min_value=0), terminals)
    def test_subscriber_sees_suffix_then_one_terminal(self, values, join_at, signal):
        """Property: a subscriber joining before value i gets values[i:] then the terminal."""
        # Arrange
        join_at = join_at % (len(values) + 1)
        subject = Subject()
        early = RecordingObserver()
        late = RecordingObserver()
        subject.subscribe(early)

        # Act
        for i, value in enumerate(values):
            if i == join_at:
                subject.subscribe(late)
            subject.emit(value)
        if join_at == len(values):
            subject.subscribe(late)
        subject.complete(signal)

        # Assert
        assert early.values == values
        assert late.values == values[join_at:]
        assert early.terminals == 1
        assert late.terminals == 1
        assert early.received[-1] == late.received[-1]

    @given(st.lists(st.integers(), max_size=20), st.lists(st.integers(), max_size=20), terminals)
    def test_nothing_after_terminal(self, before, after, signal):
        """Property: emits after the terminal are invisible, late subscribers get only the terminal."""
        subject = Subject()
        obs = RecordingObserver()
        subject.subscribe(obs)
        for value in before:
            subject.emit(value)
        subject.complete(signal)
        for value in after:
            subject.emit(value)
        subject.complete(completed())
        latecomer = RecordingObserver()
        subject.subscribe(latecomer)

        assert obs.values == before
        assert obs.terminals == 1
        assert latecomer.values == []
        assert latecomer.received == obs.received[-1:]

    @given(st.lists(st.integers(), min_size=1, max_size=50), st.data())
    def test_cancel_cuts_off_remaining_values(self, values, data):
        """Property: a subscriber cancelled after k values has seen exactly values[:k]."""
        cut = data.draw(st.integers(min_value=0, max_value=len(values)))
        subject = Subject()
        obs = RecordingObserver()
        sub = subject.subscribe(obs)
        for i, value in enumerate(values):
            if i == cut:
                sub.cancel()
            subject.emit(value)
        if cut == len(values):
            sub.cancel()
        subject.complete(completed())

        assert obs.received == values[:cut]

    @given(st.integers(min_value=0, max_value=200))
    def test_every_subscriber_gets_every_value(self, num_values):
        """Property: all values reach all subscribers regardless of count."""
        subject = Subject()
        observers = [RecordingObserver() for _ in range(3)]
        for obs in observers:
            subject.subscribe(obs)

        for i in range(num_values):
            subject.emit(i)

        assert all(len(obs.values) == num_values for obs in observers)
