from __future__ import annotations

from pathlib import Path

import turbojni
from turbojni.schema import Schema


def main() -> None:
    # A schema as emitted by react-native codegen's schema parser.
    schema = Schema.from_dict(
        {
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
                                            {"name": "a", "typeAnnotation": {"type": "NumberTypeAnnotation"}},
                                            {"name": "b", "typeAnnotation": {"type": "NumberTypeAnnotation"}},
                                        ],
                                        "returnTypeAnnotation": {"type": "NumberTypeAnnotation"},
                                    },
                                },
                                {
                                    "name": "fetch",
                                    "typeAnnotation": {
                                        "type": "FunctionTypeAnnotation",
                                        "params": [
                                            {"name": "url", "typeAnnotation": {"type": "StringTypeAnnotation"}},
                                        ],
                                        "returnTypeAnnotation": {"type": "GenericPromiseTypeAnnotation"},
                                    },
                                },
                            ],
                        }
                    }
                }
            }
        }
    )

    files = turbojni.generate("CalcLib", schema, "CalcSpec")
    for path in turbojni.write_files(files, Path("generated")):
        print("wrote", path)


if __name__ == "__main__":
    main()
