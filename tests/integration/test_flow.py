"""Integration tests: files on disk, and stores shared between threads."""

import threading
from pathlib import Path

import pytest

from iniscan import IniParser, IniStore, IniSyntaxError, dumps, loads

CHINESE_INI = (
    "[玩家]\n"
    "名字=张三\n"
    "城市=北京市海淀区中关村大街\n"
    "描述=这是一个用于测试编码检测的配置文件，其中包含了足够多的中文字符，"
    "以便检测器能够可靠地识别出文件的编码。\n"
    "[游戏]\n"
    "地图=沙漠风暴\n"
    "难度=困难\n"
    "说明=我们的部队已经准备就绪，等待指挥官的命令。\n"
)


@pytest.mark.integration
def test_file_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "settings.ini"
    store = IniStore()
    store.set("", "name", "demo")
    store.set("server", "host", "127.0.0.1")
    store.set("server", "port", "8080")

    IniParser(str(path)).write(store, blank_lines=1)
    assert path.read_text(encoding="utf-8") == (
        'name="demo"\n[server]\nhost="127.0.0.1"\nport="8080"\n\n')

    loaded = IniParser(str(path), "utf-8").read()
    assert loaded.to_dict() == store.to_dict()


@pytest.mark.integration
def test_file_with_unknown_encoding(tmp_path: Path) -> None:
    path = tmp_path / "gbk.ini"
    path.write_bytes(CHINESE_INI.encode("gbk"))

    loaded = IniParser(str(path), "utf-8").read()
    assert loaded.get("玩家", "名字") == "张三"
    assert loaded.get("游戏", "难度") == "困难"


@pytest.mark.integration
def test_syntax_error_names_the_file(tmp_path: Path) -> None:
    path = tmp_path / "broken.ini"
    path.write_text("ok=1\n[broken\n", encoding="utf-8")
    with pytest.raises(IniSyntaxError) as exc:
        IniParser(str(path), "utf-8").read()
    assert exc.value.position.filename == str(path)
    assert exc.value.position.line == 2


@pytest.mark.integration
def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        IniParser(str(tmp_path / "nope.ini")).read()


@pytest.mark.integration
def test_readers_and_writers_share_a_store() -> None:
    store = loads("[counters]\nseed=0\n")
    errors: list[BaseException] = []

    def writer(n: int) -> None:
        try:
            for i in range(100):
                store.set("counters", f"w{n}_{i}", str(i))
        except BaseException as e:
            errors.append(e)

    def reader() -> None:
        try:
            for _ in range(100):
                assert store.get("counters", "seed") == "0"
                # a snapshot is always loadable again
                loads(dumps(store))
        except BaseException as e:
            errors.append(e)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    threads += [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert not errors
    assert len(store.to_dict()["counters"]) == 401


class _GatedStream:
    """Blocks in `read()` until `release` is set."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.started = threading.Event()
        self.release = threading.Event()

    def read(self, size: int = -1) -> str:
        self.started.set()
        self.release.wait(timeout=5)
        text, self.text = self.text, ""
        return text


class _GatedSink:
    """Blocks in `write()` until `release` is set."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.started = threading.Event()
        self.release = threading.Event()

    def write(self, line: str) -> int:
        self.started.set()
        self.release.wait(timeout=5)
        self.lines.append(line)
        return len(line)


def _set_in_thread(store: IniStore, value: str) -> tuple[threading.Thread, threading.Event]:
    done = threading.Event()

    def setter() -> None:
        store.set("", "k", value)
        done.set()

    t = threading.Thread(target=setter)
    t.start()
    return t, done


@pytest.mark.integration
def test_set_waits_for_a_load_pass() -> None:
    store = IniStore()
    stream = _GatedStream("k=loaded\n")
    loader = threading.Thread(target=IniParser.readstream, args=(stream, store))
    loader.start()
    assert stream.started.wait(timeout=5)

    setter, done = _set_in_thread(store, "set")
    assert not done.wait(timeout=0.2)

    stream.release.set()
    loader.join(timeout=5)
    setter.join(timeout=5)
    assert done.is_set()
    assert store.get("", "k") == "set"


@pytest.mark.integration
def test_set_waits_for_a_save_pass() -> None:
    store = IniStore()
    store.set("", "k", "old")
    sink = _GatedSink()
    saver = threading.Thread(target=IniParser.writestream, args=(store, sink))
    saver.start()
    assert sink.started.wait(timeout=5)

    setter, done = _set_in_thread(store, "new")
    assert not done.wait(timeout=0.2)

    sink.release.set()
    saver.join(timeout=5)
    setter.join(timeout=5)
    assert done.is_set()
    assert sink.lines == ['k="old"\n']
    assert store.get("", "k") == "new"
