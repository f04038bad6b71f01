import pytest

from olsdemo.utils.config import MAX_SAMPLE_SIZE, MAX_SPEED_MS, SimulationParams, load_params


def test_defaults():
    p = SimulationParams()
    assert (p.true_slope, p.true_intercept, p.noise_level) == (1.5, 2.0, 2.0)
    assert (p.min_sample_size, p.max_sample_size) == (10, 2000)
    assert p.sampling_mode == "cumulative"
    assert p.seed == 42
    assert p.validated() is p


def test_load_params_from_yaml(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "simulation:\n"
        "  true_slope: -0.5\n"
        "  seed: 7\n"
        "  sampling_mode: independent\n"
        "  colour: blue\n"
    )
    p = load_params(cfg)
    assert p.true_slope == -0.5
    assert p.seed == 7
    assert p.sampling_mode == "independent"
    assert p.noise_level == 2.0


def test_missing_or_empty_config_uses_defaults(tmp_path):
    assert load_params(tmp_path / "nope.yaml") == SimulationParams()
    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    assert load_params(empty) == SimulationParams()


def test_replace_returns_new_instance():
    p = SimulationParams()
    q = p.replace(seed=1)
    assert q.seed == 1 and p.seed == 42


@pytest.mark.parametrize(
    "changes, field",
    [
        ({"noise_level": -0.1}, "noise_level"),
        ({"batch_size": 0}, "batch_size"),
        ({"speed_ms": -1}, "speed_ms"),
        ({"max_sample_size": 0, "min_sample_size": 0}, "max_sample_size"),
        ({"min_sample_size": 3000}, "min_sample_size"),
        ({"min_sample_size": -1}, "min_sample_size"),
        ({"sampling_mode": "sliding"}, "sampling_mode"),
        ({"speed_ms": MAX_SPEED_MS + 1}, "speed_ms"),
        ({"max_sample_size": MAX_SAMPLE_SIZE + 1}, "max_sample_size"),
        ({"seed": 42.0}, "seed"),
        ({"batch_size": "5"}, "batch_size"),
        ({"max_sample_size": True}, "max_sample_size"),
    ],
)
def test_validation_names_the_field(changes, field):
    with pytest.raises(ValueError, match=field):
        SimulationParams().replace(**changes).validated()


def test_limits_are_inclusive():
    p = SimulationParams(speed_ms=MAX_SPEED_MS, max_sample_size=MAX_SAMPLE_SIZE)
    assert p.validated() is p


def test_yaml_whole_floats_become_ints(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "simulation:\n"
        "  seed: 42.0\n"
        "  batch_size: 5.0\n"
        "  max_sample_size: 3000\n"
        "  true_slope: 2\n"
    )
    p = load_params(cfg).validated()
    assert p.seed == 42 and isinstance(p.seed, int)
    assert p.batch_size == 5 and isinstance(p.batch_size, int)
    assert p.true_slope == 2.0 and isinstance(p.true_slope, float)


@pytest.mark.parametrize(
    "line, field",
    [
        ("seed: 42.5", "seed"),
        ("min_sample_size: ten", "min_sample_size"),
        ("noise_level: loud", "noise_level"),
    ],
)
def test_yaml_bad_types_raise_value_error(tmp_path, line, field):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"simulation:\n  {line}\n")
    with pytest.raises(ValueError, match=field):
        load_params(cfg)


@pytest.mark.parametrize("line, field", [("speed_ms: 2000", "speed_ms"), ("max_sample_size: 100000", "max_sample_size")])
def test_yaml_values_beyond_widget_limits_are_rejected(tmp_path, line, field):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"simulation:\n  {line}\n")
    with pytest.raises(ValueError, match=field):
        load_params(cfg).validated()
