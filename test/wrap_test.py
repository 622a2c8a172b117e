import asyncio
import inspect
import pytest

from async_class import wrap, wrap_instance_methods, wrap_static_methods


class FakeDataStore:
    def __init__(self):
        # In memory store, imagine a DB instead
        self.store = {}

    @staticmethod
    def example_sync():
        return "foo"

    @staticmethod
    def examplePromiseAsync():
        return "foo"

    @staticmethod
    def exampleAsync():
        return (yield asyncio.sleep(0, result="foo"))

    @staticmethod
    def example():
        return (yield asyncio.sleep(0, result="foo"))

    @classmethod
    def createAsync(cls):
        return cls()

    def keys(self):
        return list(self.store.keys())

    @property
    def size(self):
        return len(self.store)

    def getAsync(self, key):
        return self.store.get(key)

    def setAsync(self, key, value):
        self.store[key] = value
        return (yield asyncio.sleep(0, result=key))


ORIGINAL_MEMBERS = dict(vars(FakeDataStore))

wrap(FakeDataStore)


@pytest.fixture()
def data_store():
    return FakeDataStore()


def test_does_not_modify_properties(data_store):
    assert FakeDataStore.__dict__["size"] is ORIGINAL_MEMBERS["size"]
    assert data_store.size == 0


def test_only_modifies_functions(data_store):
    assert isinstance(data_store.store, dict)
    assert FakeDataStore.__dict__["__init__"] is ORIGINAL_MEMBERS["__init__"]


def test_does_not_wrap_functions_without_async_suffix(data_store):
    data_store.store["foo"] = "bar"
    assert data_store.keys() == ["foo"]
    assert FakeDataStore.__dict__["keys"] is ORIGINAL_MEMBERS["keys"]


@pytest.mark.asyncio
async def test_wraps_all_generator_functions():
    assert await FakeDataStore.example() == "foo"


@pytest.mark.asyncio
async def test_wraps_instance_methods_with_async_suffix(data_store):
    data_store.store["foo"] = "bar"
    coro = data_store.getAsync("foo")
    assert inspect.isawaitable(coro)
    assert await coro == "bar"


@pytest.mark.asyncio
async def test_wraps_instance_generator_methods(data_store):
    key = await data_store.setAsync("foo", "bar")
    assert key == "foo"
    assert data_store.store["foo"] == "bar"


def test_does_not_wrap_static_methods_without_async_suffix():
    assert FakeDataStore.example_sync() == "foo"


@pytest.mark.asyncio
async def test_wraps_static_methods_with_async_suffix():
    assert await FakeDataStore.examplePromiseAsync() == "foo"


@pytest.mark.asyncio
async def test_wraps_static_generator_methods():
    assert await FakeDataStore.exampleAsync() == "foo"


@pytest.mark.asyncio
async def test_wraps_classmethods():
    assert isinstance(FakeDataStore.__dict__["createAsync"], classmethod)
    assert isinstance(await FakeDataStore.createAsync(), FakeDataStore)


def test_keeps_descriptor_types_and_metadata():
    assert isinstance(FakeDataStore.__dict__["exampleAsync"], staticmethod)
    assert FakeDataStore.getAsync.__name__ == "getAsync"
    assert FakeDataStore.getAsync.__qualname__ == "FakeDataStore.getAsync"
    assert inspect.iscoroutinefunction(FakeDataStore.getAsync)
    assert inspect.iscoroutinefunction(FakeDataStore.setAsync)
    assert list(inspect.signature(FakeDataStore.getAsync).parameters) == ["self", "key"]


def test_returns_the_same_class():
    class Foo:
        def barAsync(self):
            return 1

    assert wrap(Foo) is Foo
    assert wrap_static_methods(Foo) is Foo
    assert wrap_instance_methods(Foo) is Foo


def test_usable_as_class_decorator():
    @wrap
    class Foo:
        def barAsync(self):
            return 1

    assert inspect.iscoroutinefunction(Foo.barAsync)


def test_only_own_members_are_wrapped():
    class Base:
        def baseAsync(self):
            return "base"

    class Child(Base):
        def childAsync(self):
            return "child"

    base_method = Base.baseAsync
    wrap(Child)
    assert Base.baseAsync is base_method
    assert "baseAsync" not in vars(Child)
    assert inspect.iscoroutinefunction(Child.childAsync)


def test_wrap_static_methods_only():
    class Foo:
        @staticmethod
        def staticAsync():
            return 1

        def instanceAsync(self):
            return 2

    instance_method = Foo.instanceAsync
    wrap_static_methods(Foo)
    assert inspect.iscoroutinefunction(Foo.staticAsync)
    assert Foo.instanceAsync is instance_method


def test_wrap_instance_methods_only():
    class Foo:
        @staticmethod
        def staticAsync():
            return 1

        def instanceAsync(self):
            return 2

    static_member = Foo.__dict__["staticAsync"]
    wrap_instance_methods(Foo)
    assert Foo.__dict__["staticAsync"] is static_member
    assert inspect.iscoroutinefunction(Foo.instanceAsync)


def test_wrapping_twice_warns_and_keeps_first_wrap():
    class Foo:
        def barAsync(self):
            return 1

        def gen(self):
            yield asyncio.sleep(0)

    wrap(Foo)
    wrapped = Foo.barAsync
    wrapped_gen = Foo.gen
    with pytest.warns(UserWarning, match="already wrapped"):
        wrap(Foo)
    assert Foo.barAsync is wrapped
    assert Foo.gen is wrapped_gen


@pytest.mark.asyncio
async def test_wrapped_async_def_methods_are_awaited():
    class Foo:
        async def fetchAsync(self):
            await asyncio.sleep(0)
            return "fetched"

    wrap(Foo)
    assert await Foo().fetchAsync() == "fetched"
