_base_ = "./default.py"

# for recorded or simulated snapshots that are not ground truth
validator = dict(
    epsilon=0.2,
    max_spacing=10.0,
    ground_truth=False,
    checks=[
        dict(type="DuplicateIdentifierCheck"),
        dict(type="MalformedShapeCheck"),
        dict(type="DanglingReferenceCheck"),
        dict(type="SuccessorEndpointCheck"),
        dict(type="SuccessionSymmetryCheck"),
        dict(type="AdjacencySymmetryCheck"),
        dict(type="SamplingToleranceCheck", review_curvature=False),
        dict(type="UnknownEnumCheck"),
    ],
)
