
# _molang_parsetab.py
# This file is automatically generated. Do not edit.
# pylint: disable=W,C,R
_tabversion = '3.10'

_lr_method = 'LALR'

_lr_signature = 'rightQUESTIONCOLONleftORleftANDleftEQNEQleftLTLEGTGEleftPLUSMINUSleftTIMESDIVIDErightNOTUMINUSAND ASSIGN COLON COMMA DIVIDE EQ GE GT LBRACKET LE LPAREN LT MINUS NAME NEQ NOT NUMBER OR PLUS QUESTION RBRACKET RETURN RPAREN SEMI TIMESprogram : expressionprogram : effect_statementprogram : statement_listprogram : statement_list statementstatement_list : statement SEMIstatement_list : statement_list statement SEMIstatement : expressionstatement : effect_statementeffect_statement : NAME ASSIGN expressioneffect_statement : RETURN expressionexpression : expression PLUS expression\n                      | expression MINUS expression\n                      | expression TIMES expression\n                      | expression DIVIDE expression\n                      | expression LT expression\n                      | expression LE expression\n                      | expression GT expression\n                      | expression GE expression\n                      | expression EQ expression\n                      | expression NEQ expressionexpression : expression AND expression\n                      | expression OR expressionexpression : expression QUESTION expression COLON expressionexpression : MINUS expression %prec UMINUSexpression : NOT expressionexpression : LPAREN expression RPARENexpression : LBRACKET expression_list RBRACKETexpression : NUMBERexpression : NAMEexpression : NAME LPAREN RPARENexpression : NAME LPAREN expression_list RPARENexpression_list : expressionexpression_list : expression_list COMMA expression'
    
_lr_action_items = {'MINUS':([0,2,4,6,7,8,9,10,11,12,13,14,15,16,17,18,19,20,21,22,23,24,25,27,29,30,31,32,33,35,36,37,38,39,40,41,42,43,44,45,46,47,48,49,50,51,52,53,54,55,56,58,59,60,61,62,],[6,14,6,6,6,6,6,-28,-29,6,6,6,6,6,6,6,6,6,6,6,6,6,6,14,-5,-24,-29,-25,14,14,6,6,14,-11,-12,-13,-14,14,14,14,14,14,14,14,14,14,-6,-26,-27,6,-30,14,6,14,-31,14,]),'NOT':([0,4,6,7,8,9,12,13,14,15,16,17,18,19,20,21,22,23,24,25,29,36,37,52,55,59,],[7,7,7,7,7,7,7,7,7,7,7,7,7,7,7,7,7,7,7,7,-5,7,7,-6,7,7,]),'LPAREN':([0,4,6,7,8,9,11,12,13,14,15,16,17,18,19,20,21,22,23,24,25,29,31,36,37,52,55,59,],[8,8,8,8,8,8,36,8,8,8,8,8,8,8,8,8,8,8,8,8,8,-5,36,8,8,-6,8,8,]),'LBRACKET':([0,4,6,7,8,9,12,13,14,15,16,17,18,19,20,21,22,23,24,25,29,36,37,52,55,59,],[9,9,9,9,9,9,9,9,9,9,9,9,9,9,9,9,9,9,9,9,-5,9,9,-6,9,9,]),'NUMBER':([0,4,6,7,8,9,12,13,14,15,16,17,18,19,20,21,22,23,24,25,29,36,37,52,55,59,],[10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,10,-5,10,10,-6,10,10,]),'NAME':([0,4,6,7,8,9,12,13,14,15,16,17,18,19,20,21,22,23,24,25,29,36,37,52,55,59,],[11,11,31,31,31,31,31,31,31,31,31,31,31,31,31,31,31,31,31,31,-5,31,31,-6,31,31,]),'RETURN':([0,4,29,52,],[12,12,-5,-6,]),'$end':([1,2,3,4,10,11,26,27,28,29,30,31,32,38,39,40,41,42,43,44,45,46,47,48,49,50,52,53,54,56,58,61,62,],[0,-1,-2,-3,-28,-29,-4,-7,-8,-5,-24,-29,-25,-10,-11,-12,-13,-14,-15,-16,-17,-18,-19,-20,-21,-22,-6,-26,-27,-30,-9,-31,-23,]),'PLUS':([2,10,11,27,30,31,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,58,60,61,62,],[13,-28,-29,13,-24,-29,-25,13,13,13,-11,-12,-13,-14,13,13,13,13,13,13,13,13,13,-26,-27,-30,13,13,-31,13,]),'TIMES':([2,10,11,27,30,31,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,58,60,61,62,],[15,-28,-29,15,-24,-29,-25,15,15,15,15,15,-13,-14,15,15,15,15,15,15,15,15,15,-26,-27,-30,15,15,-31,15,]),'DIVIDE':([2,10,11,27,30,31,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,58,60,61,62,],[16,-28,-29,16,-24,-29,-25,16,16,16,16,16,-13,-14,16,16,16,16,16,16,16,16,16,-26,-27,-30,16,16,-31,16,]),'LT':([2,10,11,27,30,31,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,58,60,61,62,],[17,-28,-29,17,-24,-29,-25,17,17,17,-11,-12,-13,-14,-15,-16,-17,-18,17,17,17,17,17,-26,-27,-30,17,17,-31,17,]),'LE':([2,10,11,27,30,31,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,58,60,61,62,],[18,-28,-29,18,-24,-29,-25,18,18,18,-11,-12,-13,-14,-15,-16,-17,-18,18,18,18,18,18,-26,-27,-30,18,18,-31,18,]),'GT':([2,10,11,27,30,31,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,58,60,61,62,],[19,-28,-29,19,-24,-29,-25,19,19,19,-11,-12,-13,-14,-15,-16,-17,-18,19,19,19,19,19,-26,-27,-30,19,19,-31,19,]),'GE':([2,10,11,27,30,31,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,58,60,61,62,],[20,-28,-29,20,-24,-29,-25,20,20,20,-11,-12,-13,-14,-15,-16,-17,-18,20,20,20,20,20,-26,-27,-30,20,20,-31,20,]),'EQ':([2,10,11,27,30,31,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,58,60,61,62,],[21,-28,-29,21,-24,-29,-25,21,21,21,-11,-12,-13,-14,-15,-16,-17,-18,-19,-20,21,21,21,-26,-27,-30,21,21,-31,21,]),'NEQ':([2,10,11,27,30,31,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,58,60,61,62,],[22,-28,-29,22,-24,-29,-25,22,22,22,-11,-12,-13,-14,-15,-16,-17,-18,-19,-20,22,22,22,-26,-27,-30,22,22,-31,22,]),'AND':([2,10,11,27,30,31,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,58,60,61,62,],[23,-28,-29,23,-24,-29,-25,23,23,23,-11,-12,-13,-14,-15,-16,-17,-18,-19,-20,-21,23,23,-26,-27,-30,23,23,-31,23,]),'OR':([2,10,11,27,30,31,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,58,60,61,62,],[24,-28,-29,24,-24,-29,-25,24,24,24,-11,-12,-13,-14,-15,-16,-17,-18,-19,-20,-21,-22,24,-26,-27,-30,24,24,-31,24,]),'QUESTION':([2,10,11,27,30,31,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,58,60,61,62,],[25,-28,-29,25,-24,-29,-25,25,25,25,-11,-12,-13,-14,-15,-16,-17,-18,-19,-20,-21,-22,25,-26,-27,-30,25,25,-31,25,]),'SEMI':([2,3,5,10,11,26,27,28,30,31,32,38,39,40,41,42,43,44,45,46,47,48,49,50,53,54,56,58,61,62,],[-7,-8,29,-28,-29,52,-7,-8,-24,-29,-25,-10,-11,-12,-13,-14,-15,-16,-17,-18,-19,-20,-21,-22,-26,-27,-30,-9,-31,-23,]),'RPAREN':([10,30,31,32,33,35,36,39,40,41,42,43,44,45,46,47,48,49,50,53,54,56,57,60,61,62,],[-28,-24,-29,-25,53,-32,56,-11,-12,-13,-14,-15,-16,-17,-18,-19,-20,-21,-22,-26,-27,-30,61,-33,-31,-23,]),'RBRACKET':([10,30,31,32,34,35,39,40,41,42,43,44,45,46,47,48,49,50,53,54,56,60,61,62,],[-28,-24,-29,-25,54,-32,-11,-12,-13,-14,-15,-16,-17,-18,-19,-20,-21,-22,-26,-27,-30,-33,-31,-23,]),'COMMA':([10,30,31,32,34,35,39,40,41,42,43,44,45,46,47,48,49,50,53,54,56,57,60,61,62,],[-28,-24,-29,-25,55,-32,-11,-12,-13,-14,-15,-16,-17,-18,-19,-20,-21,-22,-26,-27,-30,55,-33,-31,-23,]),'COLON':([10,30,31,32,39,40,41,42,43,44,45,46,47,48,49,50,51,53,54,56,61,62,],[-28,-24,-29,-25,-11,-12,-13,-14,-15,-16,-17,-18,-19,-20,-21,-22,59,-26,-27,-30,-31,-23,]),'ASSIGN':([11,],[37,]),}

_lr_action = {}
for _k, _v in _lr_action_items.items():
   for _x,_y in zip(_v[0],_v[1]):
      if not _x in _lr_action:  _lr_action[_x] = {}
      _lr_action[_x][_k] = _y
del _lr_action_items

_lr_goto_items = {'program':([0,],[1,]),'expression':([0,4,6,7,8,9,12,13,14,15,16,17,18,19,20,21,22,23,24,25,36,37,55,59,],[2,27,30,32,33,35,38,39,40,41,42,43,44,45,46,47,48,49,50,51,35,58,60,62,]),'effect_statement':([0,4,],[3,28,]),'statement_list':([0,],[4,]),'statement':([0,4,],[5,26,]),'expression_list':([9,36,],[34,57,]),}

_lr_goto = {}
for _k, _v in _lr_goto_items.items():
   for _x, _y in zip(_v[0], _v[1]):
       if not _x in _lr_goto: _lr_goto[_x] = {}
       _lr_goto[_x][_k] = _y
del _lr_goto_items
_lr_productions = [
  ("S' -> program","S'",1,None,None,None),
  ('program -> expression','program',1,'p_program_expression','molang_parser.py',117),
  ('program -> effect_statement','program',1,'p_program_single_statement','molang_parser.py',121),
  ('program -> statement_list','program',1,'p_program_statements','molang_parser.py',125),
  ('program -> statement_list statement','program',2,'p_program_statements_unterminated','molang_parser.py',129),
  ('statement_list -> statement SEMI','statement_list',2,'p_statement_list_single','molang_parser.py',133),
  ('statement_list -> statement_list statement SEMI','statement_list',3,'p_statement_list_multiple','molang_parser.py',137),
  ('statement -> expression','statement',1,'p_statement_expression','molang_parser.py',141),
  ('statement -> effect_statement','statement',1,'p_statement_effect','molang_parser.py',145),
  ('effect_statement -> NAME ASSIGN expression','effect_statement',3,'p_effect_statement_assign','molang_parser.py',149),
  ('effect_statement -> RETURN expression','effect_statement',2,'p_effect_statement_return','molang_parser.py',153),
  ('expression -> expression PLUS expression','expression',3,'p_expression_arithmetic','molang_parser.py',168),
  ('expression -> expression MINUS expression','expression',3,'p_expression_arithmetic','molang_parser.py',169),
  ('expression -> expression TIMES expression','expression',3,'p_expression_arithmetic','molang_parser.py',170),
  ('expression -> expression DIVIDE expression','expression',3,'p_expression_arithmetic','molang_parser.py',171),
  ('expression -> expression LT expression','expression',3,'p_expression_arithmetic','molang_parser.py',172),
  ('expression -> expression LE expression','expression',3,'p_expression_arithmetic','molang_parser.py',173),
  ('expression -> expression GT expression','expression',3,'p_expression_arithmetic','molang_parser.py',174),
  ('expression -> expression GE expression','expression',3,'p_expression_arithmetic','molang_parser.py',175),
  ('expression -> expression EQ expression','expression',3,'p_expression_arithmetic','molang_parser.py',176),
  ('expression -> expression NEQ expression','expression',3,'p_expression_arithmetic','molang_parser.py',177),
  ('expression -> expression AND expression','expression',3,'p_expression_logical','molang_parser.py',182),
  ('expression -> expression OR expression','expression',3,'p_expression_logical','molang_parser.py',183),
  ('expression -> expression QUESTION expression COLON expression','expression',5,'p_expression_ternary','molang_parser.py',188),
  ('expression -> MINUS expression','expression',2,'p_expression_negate','molang_parser.py',200),
  ('expression -> NOT expression','expression',2,'p_expression_not','molang_parser.py',208),
  ('expression -> LPAREN expression RPAREN','expression',3,'p_expression_group','molang_parser.py',213),
  ('expression -> LBRACKET expression_list RBRACKET','expression',3,'p_expression_vector','molang_parser.py',217),
  ('expression -> NUMBER','expression',1,'p_expression_number','molang_parser.py',222),
  ('expression -> NAME','expression',1,'p_expression_name','molang_parser.py',226),
  ('expression -> NAME LPAREN RPAREN','expression',3,'p_expression_call_empty','molang_parser.py',230),
  ('expression -> NAME LPAREN expression_list RPAREN','expression',4,'p_expression_call','molang_parser.py',234),
  ('expression_list -> expression','expression_list',1,'p_expression_list_single','molang_parser.py',238),
  ('expression_list -> expression_list COMMA expression','expression_list',3,'p_expression_list_multiple','molang_parser.py',242),
]
