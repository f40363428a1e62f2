from .existence_guard import Guarded, desired_count, effective_id, guard, guarded_options
