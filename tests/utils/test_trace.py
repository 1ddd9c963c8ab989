from pychip8.cpu import CPUState
from pychip8.utils.trace import TraceRecorder


def _state(pc: int, i: int = 0, **registers: int) -> CPUState:
    state = CPUState(pc=pc, i=i)
    for name, value in registers.items():
        state.v[int(name[1:], 16)] = value
    return state


def test_trace_recorder_overwrites_old_entries():
    recorder = TraceRecorder(capacity=2)

    recorder.record_step(_state(0x200, v0=0x11), 0x6011, delay=0, sound=0, waiting=False, halted=False, mnemonic="LD")
    recorder.record_step(_state(0x202, i=0x300), 0xA300, delay=3, sound=0, waiting=False, halted=False, mnemonic="LD")
    recorder.record_step(_state(0x204, vf=0x01), 0xF00A, delay=2, sound=1, waiting=True, halted=False, mnemonic="LD")

    lines = list(recorder.format_entries())
    assert len(recorder) == 2
    assert len(lines) == 2
    assert "pc=0202" in lines[0]
    assert "I=0300" in lines[0]
    assert "pc=0204" in lines[1]
    assert "flags=WAIT" in lines[1]
    assert lines[1].split("V=[")[1].startswith("00 ")
    assert recorder.last_entry().registers[0xF] == 0x01


def test_trace_recorder_handles_missing_opcode():
    recorder = TraceRecorder(1)
    recorder.record_step(_state(0x200), None, delay=0, sound=0, waiting=False, halted=True, note="fault")
    lines = list(recorder.format_entries())
    assert len(lines) == 1
    assert "opcode=----" in lines[0]
    assert "flags=HALT,fault" in lines[0]


def test_trace_recorder_limit_and_clear():
    recorder = TraceRecorder(4)
    for pc in range(0x200, 0x208, 2):
        recorder.record_step(_state(pc), 0x1200, delay=0, sound=0, waiting=False, halted=False)
    assert [entry.pc for entry in recorder.entries(limit=2)] == [0x204, 0x206]
    recorder.clear()
    assert recorder.last_entry() is None
