from designopt.engine.config.loader import RunSpec, load_run_spec, run_spec_from_dict

__all__ = ["RunSpec", "load_run_spec", "run_spec_from_dict"]
