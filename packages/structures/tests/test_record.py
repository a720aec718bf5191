from dataclasses import dataclass

from forestry_structures.builder import build
from forestry_structures.config import TreeNodeConfig
from forestry_structures.record import ObjectRecord, Record, as_record


@dataclass
class Menu:
    id: int
    parentId: int
    name: str


class Slotted:
    __slots__ = ("id", "parentId", "_secret")

    def __init__(self, id, parentId):
        self.id = id
        self.parentId = parentId
        self._secret = "hidden"


def test_dict_is_a_record():
    rec = {"id": 1}
    assert isinstance(rec, Record)
    assert as_record(rec) is rec


def test_object_record_reads_attributes():
    record = as_record(Menu(2, 1, "Settings"))
    assert isinstance(record, ObjectRecord)
    assert record.get("name") == "Settings"
    assert record.get("missing") is None
    assert record.get("missing", "dflt") == "dflt"
    assert list(record.keys()) == ["id", "parentId", "name"]


def test_object_record_with_slots():
    record = ObjectRecord(Slotted(5, 4))
    assert record.keys() == ["id", "parentId"]
    assert record.get("parentId") == 4
    assert record.get("_secret") == "hidden"


def test_record_like_objects_pass_through():
    record = ObjectRecord(Menu(1, 0, "x"))
    assert as_record(record) is record


class MongoDoc:
    def __init__(self, _id, parentId, title):
        self._id = _id
        self.parentId = parentId
        self.title = title


def test_private_field_as_configured_id():
    config = TreeNodeConfig().set_id_key("_id").set_name_key("title")
    docs = [MongoDoc(1, 0, "root"), MongoDoc(2, 1, "child")]
    forest = build(docs, 0, config)
    assert [node.id for node in forest] == [1]
    assert forest[0].children[0].name == "child"
    # private attributes stay out of the extras
    assert forest[0].extra == {}
