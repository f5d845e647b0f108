"""Schema inference tests."""

import datetime
import enum
from decimal import Decimal

import pytest

from pymap2row._errors import EmptyInputError
from pymap2row._resolver import infer_schema, value_data_type
from pymap2row.schema import DataType, Field, Schema


class Color(enum.Enum):
    RED = 1


class TestValueDataType:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (1, DataType.INTEGER),
            (-12345678901234567890, DataType.INTEGER),
            (1.5, DataType.DOUBLE),
            (Decimal("1.50"), DataType.DECIMAL),
            (True, DataType.BOOLEAN),
            (False, DataType.BOOLEAN),
            (datetime.date(2024, 1, 2), DataType.DATE),
            (datetime.datetime(2024, 1, 2, 3, 4, 5), DataType.TIMESTAMP),
            ("text", DataType.STRING),
            (None, DataType.STRING),
            (Color.RED, DataType.STRING),
            (b"bytes", DataType.STRING),
        ],
    )
    def test_value_types(self, value, expected):
        assert value_data_type(value) is expected

    def test_bool_is_not_integer(self):
        # bool subclasses int; it must still infer as BOOLEAN
        assert value_data_type(True) is not DataType.INTEGER

    def test_datetime_is_not_date(self):
        # datetime subclasses date; it must still infer as TIMESTAMP
        assert value_data_type(datetime.datetime(2024, 1, 1)) is DataType.TIMESTAMP


class TestInferSchema:
    def test_field_order_follows_sample(self, default_mapper):
        schema = infer_schema([{"name": "a", "id": 1, "score": 2.5}], default_mapper.encode)
        assert schema.names == ["NAME", "ID", "SCORE"]

    def test_types(self, default_mapper):
        schema = infer_schema(
            [{"id": 1, "active": True, "joined": datetime.date(2020, 5, 1)}],
            default_mapper.encode,
        )
        assert schema == Schema([
            Field(name="ID", type=DataType.INTEGER, nullable=True),
            Field(name="ACTIVE", type=DataType.BOOLEAN, nullable=True),
            Field(name="JOINED", type=DataType.DATE, nullable=True),
        ])

    def test_all_fields_nullable_even_when_present(self, default_mapper):
        schema = infer_schema([{"id": 1, "name": "x"}], default_mapper.encode)
        assert all(f.nullable for f in schema)

    def test_only_first_record_is_sampled(self, default_mapper):
        schema = infer_schema(
            [{"id": 1}, {"id": "one", "extra": True}],
            default_mapper.encode,
        )
        assert schema.names == ["ID"]
        assert schema.find_field("ID").type is DataType.INTEGER

    def test_accepts_generator(self, default_mapper):
        records = ({"id": i} for i in range(3))
        assert infer_schema(records, default_mapper.encode).names == ["ID"]

    def test_empty_input(self, default_mapper):
        with pytest.raises(EmptyInputError):
            infer_schema([], default_mapper.encode)

    def test_identity_encode(self, identity_mapper):
        schema = infer_schema([{"firstName": "a"}], identity_mapper.encode)
        assert schema.names == ["firstName"]

    def test_custom_encode(self, prefix_mapper):
        schema = infer_schema([{"id": 1, "name": "a"}], prefix_mapper.encode)
        assert schema.names == ["COL_ID", "COL_NAME"]
