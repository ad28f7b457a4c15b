element_0 = 1
element_1 = "one"
element_2 = dict(field_1="100", field_2=dict(subfield_1=11, subfield_2=12))
element_3 = [dict(type="DanglingReferenceCheck"), dict(type="SuccessorEndpointCheck"), 3]
