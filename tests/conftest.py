import pytest


@pytest.fixture(autouse=True)
def _clear_turbojni_env(monkeypatch):
    # Config reads process env; keep tests independent of the caller's shell.
    monkeypatch.delenv("TURBOJNI_OUT_DIR", raising=False)
    monkeypatch.delenv("TURBOJNI_ON_DUPLICATE", raising=False)
    yield


@pytest.fixture
def calc_schema_dict():
    return {
        "modules": {
            "NativeCalc": {
                "nativeModules": {
                    "Calc": {
                        "aliases": {},
                        "properties": [
                            {
                                "name": "add",
                                "typeAnnotation": {
                                    "type": "FunctionTypeAnnotation",
                                    "params": [
                                        {
                                            "name": "a",
                                            "nullable": False,
                                            "typeAnnotation": {"type": "NumberTypeAnnotation"},
                                        },
                                        {
                                            "name": "b",
                                            "nullable": False,
                                            "typeAnnotation": {"type": "NumberTypeAnnotation"},
                                        },
                                    ],
                                    "returnTypeAnnotation": {
                                        "type": "NumberTypeAnnotation",
                                        "nullable": False,
                                    },
                                },
                            }
                        ],
                    }
                }
            }
        }
    }
