"""Test add/remove editing of repeatable rows"""

import pytest

from facilities.controller import FacilityFormController
from facilities.schemas import EquipmentRow


def equipment(n):
    return {"lab_name": f"Lab {n}", "equipment_name": f"Item {n}", "capacity_and_make": f"Make {n}"}


@pytest.fixture
def controller():
    """Bio lab form with four equipment rows"""
    return FacilityFormController(
        "bio-allied-labs", {"equipment": [equipment(n) for n in range(4)]}
    )


@pytest.fixture
def editor(controller):
    return controller.editor("equipment")


class TestAddRows:
    """Test appending and inserting rows"""

    def test_add_appends_default_row(self, controller, editor):
        """New rows are blank and mirrored into the form"""
        key = editor.add()
        assert len(editor) == 5
        assert controller.watch("equipment.4") == EquipmentRow().model_dump()
        assert editor.keys[-1] == key

    def test_add_given_row(self, controller, editor):
        """A prepared row can be appended"""
        editor.add(equipment(9))
        assert controller.watch("equipment.4.lab_name") == "Lab 9"

    def test_insert_at_front(self, controller, editor):
        """Rows can be inserted anywhere"""
        editor.insert(0, equipment(9))
        assert [row["lab_name"] for row in controller.watch("equipment")] == [
            "Lab 9", "Lab 0", "Lab 1", "Lab 2", "Lab 3",
        ]

    def test_insert_out_of_range(self, editor):
        with pytest.raises(IndexError):
            editor.insert(7)

    def test_keys_are_unique(self, editor):
        editor.add()
        editor.add()
        assert len(set(editor.keys)) == len(editor) == 6

    def test_raw_space_default_row(self):
        """Area rows default to an empty covered block"""
        controller = FacilityFormController("raw-space-lab")
        controller.editor("area_details").add()
        assert controller.watch("area_details.1") == {
            "area": 0,
            "type": "Covered",
            "furnishing": "Not Furnished",
            "customisation": "Open to Customisation",
        }


class TestRemoveRows:
    """Test removing rows"""

    def test_remove_preserves_order(self, controller, editor):
        """Removing one row keeps the others in order"""
        removed = editor.remove(2)
        assert removed["lab_name"] == "Lab 2"
        assert [row["lab_name"] for row in controller.watch("equipment")] == [
            "Lab 0", "Lab 1", "Lab 3",
        ]

    def test_remove_keeps_surviving_keys(self, editor):
        """Keys follow their rows, not their positions"""
        keys = list(editor.keys)
        editor.remove(1)
        assert editor.keys == [keys[0], keys[2], keys[3]]

    def test_remove_by_key(self, controller, editor):
        key = editor.keys[3]
        editor.remove_key(key)
        assert len(controller.watch("equipment")) == 3
        with pytest.raises(KeyError):
            editor.index_of(key)

    @pytest.mark.parametrize("index", [4, 10, -1])
    def test_remove_out_of_range(self, editor, index):
        """Only existing rows can be removed"""
        with pytest.raises(IndexError):
            editor.remove(index)
        assert len(editor) == 4

    def test_remove_clears_row_errors(self, controller, editor):
        """Errors under the collection are dropped when rows shift"""
        controller.errors = {"equipment.3.lab_name": "Required", "name": "Name is required"}
        editor.remove(3)
        assert controller.errors == {"name": "Name is required"}

    def test_first_row_cannot_be_removed_from_ui(self, editor):
        """The first row always stays in the form"""
        assert not editor.can_remove(0)
        assert editor.can_remove(1)
        assert editor.can_remove(3)
        assert not editor.can_remove(4)


class TestSync:
    """Test the editor staying in step with the form"""

    def test_update_writes_through_controller(self, controller, editor):
        """Row edits go through set_field"""
        controller.errors = {"equipment.1.lab_name": "Required"}
        editor.update(1, "lab_name", "Genomics")
        assert controller.watch("equipment.1.lab_name") == "Genomics"
        assert editor.rows[1]["lab_name"] == "Genomics"
        assert controller.errors == {}

    def test_set_field_on_collection_resyncs_editor(self, controller, editor):
        """Replacing the whole collection is seen by the editor"""
        key = editor.keys[0]
        controller.set_field("equipment", [equipment(7)])
        assert len(editor) == 1
        assert editor.keys == [key]
        assert editor.rows[0]["lab_name"] == "Lab 7"

    def test_iteration_yields_keys_and_rows(self, editor):
        pairs = list(editor)
        assert [key for key, _ in pairs] == editor.keys
        assert pairs[0][1]["lab_name"] == "Lab 0"

    def test_reset_restores_single_row(self, controller, editor):
        """After a reset the editor holds the default row"""
        controller.reset()
        assert len(editor) == 1
        assert editor.rows[0] == EquipmentRow().model_dump()
