"""
有理多项式系数表
各阶近似 P(m)/Q(m) 的拟合系数，按从最高次幂到常数项的顺序排列

系数以十进制字符串保存，使用时按输入数据类型的精度实例化，
这样 longdouble 输入可以保留 6 阶系数的扩展精度位。

拟合方式（离线完成，此处不复现）:
- 1~4 阶: 线性规划，[0.5, 1.0] 上 100000 个样本点
- 5 阶: ceres 在 38 个点上拟合，再以差分进化针对最大误差优化
- 6 阶: ceres 在 38 个点上拟合
"""

from typing import Dict, Tuple


# 分子系数 (a*m^d + b*m^(d-1) + ... )
NUMERATOR_COEFFICIENTS: Dict[int, Tuple[str, ...]] = {
    1: (
        '1.4767235475800453',
        '-1.477808113688585',
    ),
    2: (
        '1.9127166899499954',
        '-0.68851400593499545',
        '-1.22420645509838',
    ),
    3: (
        '1.1098414161667869',
        '1.4491119665946153',
        '-2.0697678829202806',
        '-0.48918550780729392',
    ),
    4: (
        '0.59329970349044314',
        '2.3979646338966889',
        '-0.96358966800238843',
        '-1.8439274267589987',
        '-0.18374724264449727',
    ),
    5: (
        '1',
        '7.71936522214048448375934',
        '3.86819598045858414891995',
        '-8.62625591215740072925655',
        '-3.75643884533287897298237',
        '-0.20486644510896143134282',
    ),
    6: (
        '1.000000000000000000000e+00',
        '1.264421020196026468341e+01',
        '2.097757281182429878186e+01',
        '-1.096689803557884168583e+01',
        '-1.931053288761708230936e+01',
        '-4.197137193704804758454e+00',
        '-1.472148968838493110489e-01',
    ),
}

# 分母系数
DENOMINATOR_COEFFICIENTS: Dict[int, Tuple[str, ...]] = {
    1: (
        '0.60987486544988612',
        '0.43559347328148307',
    ),
    2: (
        '0.49463685172392841',
        '1.426594307123505',
        '0.2533316901691966',
    ),
    3: (
        '0.22977948696488379',
        '1.4961611668393175',
        '1.071708023446889',
        '0.084444549259932208',
    ),
    4: (
        '0.1068562844523792',
        '1.2392957064266512',
        '2.0062979261642901',
        '0.63680961689938775',
        '0.028211791264274255',
    ),
    5: (
        '0.163694582050043557774899',
        '2.92653202255549693688863',
        '8.32056953375982644161013',
        '5.87824918118857908666541',
        '1.03190040649530079264196',
        '0.0288076245100893947592713',
    ),
    6: (
        '1.515951847105251049097e-01',
        '3.923015269365503598920e+00',
        '1.753784228757662333464e+01',
        '2.219034855172147757685e+01',
        '8.839440525270575221839e+00',
        '9.965678875171709583114e-01',
        '1.940841159387440492679e-02',
    ),
}


def get_coefficients(degree: int) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """返回 (分子系数, 分母系数)"""
    return NUMERATOR_COEFFICIENTS[degree], DENOMINATOR_COEFFICIENTS[degree]
