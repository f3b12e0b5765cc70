import pandas
import pytest

from epi_hub_forecasts.lib import io
from epi_hub_forecasts.lib.io.marshall import (
    CSVMarshall,
    YamlMarshall,
)


@pytest.fixture
def draws():
    return pandas.DataFrame({
        'draw': [1, 2, 3],
        '0': [10., 11., 12.],
        '1': [20., 21., 22.],
    })


@pytest.fixture
def observed_counts():
    return pandas.DataFrame({
        'location': ['Bronx', 'Bronx', 'Citywide'],
        'date': ['2025-01-01', '2025-01-02', '2025-01-01'],
        'observed_count': [4., None, 9.],
    })


class MarshallInterfaceTests:
    """
    Mixin class for testing the marshall interface.
    """

    def test_leaf_marshall(self, instance, draws_root, draws):
        self.assert_load_dump_workflow_correct(instance, draws, key=draws_root.hindcast(location='Bronx'))

    def test_single_file_marshall(self, instance, preprocessing_root, observed_counts):
        self.assert_load_dump_workflow_correct(instance, observed_counts, key=preprocessing_root.observed_counts())

    def test_no_overwriting(self, instance, preprocessing_root, observed_counts):
        self.assert_no_accidental_overwrites(instance, observed_counts, key=preprocessing_root.observed_counts())

    def test_interface_methods(self, instance):
        "Test mandatory interface methods exist."
        assert hasattr(instance, "dump")
        assert hasattr(instance, "load")
        assert hasattr(instance, "exists")

    def assert_load_dump_workflow_correct(self, instance, data, key):
        "Helper method for testing load/dump marshalling does not change data."
        assert not instance.exists(key)
        assert instance.dump(data, key=key) is None, ".dump() returns non-None value"
        assert instance.exists(key)
        loaded = instance.load(key=key)

        pandas.testing.assert_frame_equal(data, loaded)

    def assert_no_accidental_overwrites(self, instance, data, key):
        "Test overwriting data implicitly is not supported."
        instance.dump(data, key=key)
        with pytest.raises(LookupError):
            instance.dump(data, key=key)
        instance.dump(data, key=key, strict=False)


class TestCSVMarshall(MarshallInterfaceTests):
    @pytest.fixture
    def draws_root(self, tmp_path):
        root = io.PosteriorDrawsRoot(tmp_path, data_format='csv')
        io.touch(root)
        return root

    @pytest.fixture
    def preprocessing_root(self, tmp_path):
        root = io.PreprocessingRoot(tmp_path, data_format='csv')
        io.touch(root)
        return root

    @pytest.fixture
    def instance(self):
        return CSVMarshall

    def test_leaves(self, instance, draws_root, draws):
        # Dots in a location name are part of the leaf, not a suffix.
        for location in ['St. Louis', 'Citywide', 'Bronx']:
            instance.dump(draws, key=draws_root.forecast(location=location))

        assert io.leaves(draws_root.forecast) == ['Bronx', 'Citywide', 'St. Louis']
        assert io.leaves(draws_root.hindcast) == []


class TestYamlMarshall:

    def test_round_trip(self, tmp_path):
        root = io.AggregationRoot(tmp_path)
        key = root.specification()
        data = {'parameters': {'forecast_date': '2025-01-03', 'quantiles': [0.25, 0.5, 0.75]}}

        YamlMarshall.dump(data, key)

        assert (tmp_path / 'aggregation_specification.yaml').exists()
        assert YamlMarshall.load(key) == data
        with pytest.raises(LookupError):
            YamlMarshall.dump(data, key)


class TestDataRoots:

    def test_invalid_data_format(self, tmp_path):
        with pytest.raises(ValueError):
            io.AggregationRoot(tmp_path, data_format='parquet')

    def test_structure(self, tmp_path):
        root = io.AggregationRoot(tmp_path)

        assert root.dataset_types == ['quantile_forecasts', 'weekly_draws', 'daily_summary']
        assert root.metadata_types == ['specification']
        assert root.terminal_paths() == [tmp_path]

    def test_leaf_directories(self, tmp_path):
        root = io.PosteriorDrawsRoot(tmp_path)

        assert root.terminal_paths() == [tmp_path, tmp_path / 'forecast', tmp_path / 'hindcast']

    def test_keys(self, tmp_path):
        root = io.PosteriorDrawsRoot(tmp_path)

        assert root.hindcast(location='Bronx') == io.DatasetKey(tmp_path, 'csv', 'hindcast', 'Bronx')
        with pytest.raises(TypeError):
            root.hindcast('Bronx')

        single_file = io.PreprocessingRoot(tmp_path)
        with pytest.raises(TypeError):
            single_file.observed_counts(location='Bronx')
        with pytest.raises(TypeError):
            io.leaves(single_file.observed_counts)
