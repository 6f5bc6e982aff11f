''' Operand grammar '''

import pyparsing as pp

import regmu.common.ops as ops


reg_indices = {name: index for index, name in enumerate(ops.REGISTER_NAMES)}

reg_ref = pp.one_of(ops.REGISTER_NAMES, as_keyword=True)
reg_op = reg_ref.copy().set_parse_action(lambda r: reg_indices[r[0]])

us_dec_const = pp.Regex(r'\+?[0-9]+').set_parse_action(lambda r: int(r[0]))
